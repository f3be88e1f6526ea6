"""CLI para generar el recap (rachas + heatmap de esfuerzo) de un período."""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from pathlib import Path
from typing import cast

from dateutil import tz

from recap_tool.dates import parse_day_key
from recap_tool.demo import sample_days
from recap_tool.excel_writer import ExcelLayout, write_recap_xlsx
from recap_tool.model import DistanceUnit, Recap
from recap_tool.recap import RecapConfig, build_recap, build_recap_from_days
from recap_tool.sources.activities_csv import ActivityCsvPaths, ActivityCsvSource

_UNITS: dict[str, DistanceUnit] = {"mi": DistanceUnit.MILES, "km": DistanceUnit.KILOMETERS}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Recap de actividad: rachas y heatmap de esfuerzo relativo."
    )
    parser.add_argument(
        "--activities",
        default=str(Path.home() / "recap" / "activities"),
        help="CSV o carpeta con CSVs de actividades.",
    )
    parser.add_argument("--start", help="Primer día YYYY-MM-DD (default: 1 de enero).")
    parser.add_argument("--end", help="Último día YYYY-MM-DD (default: hoy).")
    parser.add_argument("--tz", help="Zona horaria IANA (default: la local).")
    parser.add_argument("--unit", choices=sorted(_UNITS), default="mi")
    parser.add_argument(
        "--distance-scale",
        type=float,
        default=1.0,
        help="Factor para convertir la distancia del CSV a metros.",
    )
    parser.add_argument("--out", help="Ruta del XLSX a generar (opcional).")
    parser.add_argument(
        "--demo", action="store_true", help="Usar datos de muestra en lugar del CSV."
    )
    ns = parser.parse_args(argv)

    for name in ("start", "end"):
        raw = getattr(ns, name)
        if raw is not None and parse_day_key(raw) is None:
            parser.error(f"--{name}: fecha inválida {raw!r} (usar YYYY-MM-DD)")
    if ns.tz is not None and tz.gettz(ns.tz) is None:
        parser.error(f"--tz: zona desconocida {ns.tz!r}")
    return ns


def resolve_window(ns: argparse.Namespace, today: date) -> tuple[date, date]:
    """Window from the arguments; defaults to year-to-date."""
    start = cast(date, parse_day_key(ns.start)) if ns.start else date(today.year, 1, 1)
    end = cast(date, parse_day_key(ns.end)) if ns.end else today
    return start, end


def main(argv: list[str] | None = None) -> int:
    """Run the recap CLI.

    Returns:
        Exit code (0 on success).
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    ns = parse_args(argv)
    zone = tz.gettz(ns.tz) if ns.tz else tz.tzlocal()
    start, end = resolve_window(ns, datetime.now(tz=zone).date())
    config = RecapConfig(tz=zone, unit=_UNITS[ns.unit])

    if ns.demo:
        recap = build_recap_from_days(sample_days(start, end), start, end)
    else:
        source = ActivityCsvSource(
            ActivityCsvPaths(
                root=Path(ns.activities).expanduser().resolve(),
                distance_scale=ns.distance_scale,
            )
        )
        source.validate()
        files = source.activity_files()
        activities = source.load_activities(files)
        print(f"OK: Activity files: {len(files)} ({len(activities)} activities)")
        recap = build_recap(activities, start, end, config)

    _print_recap(recap)

    if ns.out:
        out_path = Path(ns.out).expanduser().resolve()
        write_recap_xlsx(recap, out_path, ExcelLayout())
        print(f"OK: Output: {out_path}")
    return 0


def _print_recap(recap: Recap) -> None:
    window = recap.window
    streaks = recap.streaks
    summary = recap.summary
    print(f"Window: {window.start.isoformat()} .. {window.end.isoformat()}")
    print(
        f"Active days: {summary.active_days}/{summary.total_days} "
        f"({summary.active_pct}%), activities: {summary.total_activities}"
    )
    print(f"Longest streak: {streaks.longest_streak_days} day(s)")
    best = streaks.best_seven_day_window_count
    if streaks.best_window_start is not None:
        print(f"Best 7-day window: {best} day(s) from {streaks.best_window_start.isoformat()}")
    else:
        print(f"Best 7-day window: {best} day(s)")
    print(f"Weeks: {len(recap.weeks)}")
