"""Agregación diaria de actividades crudas (día local, totales, desglose)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, tzinfo

import pandas as pd

from recap_tool.dates import parse_day_key, to_local_day
from recap_tool.effort import make_day_record, round_half_up, sanitize
from recap_tool.model import (
    ActivityRecord,
    DayRecord,
    DistanceUnit,
    HeatmapSummary,
    RecapTotals,
    TypeBreakdown,
)

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "date",
    "start",
    "local_start",
    "type",
    "distance_m",
    "moving_time_sec",
    "elevation_m",
    "effort_score",
]
DAILY_COLUMNS = [
    "date",
    "activities",
    "distance",
    "minutes",
    "types",
    "effort_type",
    "effort_score",
]
OTHER_TYPE = "Other"


def activities_to_frame(
    activities: Iterable[ActivityRecord], tz: tzinfo | None = None
) -> pd.DataFrame:
    """Convert activities to a DataFrame with their local day.

    Activities whose start cannot be resolved to a day are dropped.
    """
    rows: list[dict[str, object]] = []
    skipped = 0
    for a in activities:
        day = to_local_day(a.start, tz)
        if day is None:
            skipped += 1
            continue
        rows.append(
            {
                "date": day,
                "start": a.start,
                "local_start": _wall_clock(a.start, tz),
                "type": (a.activity_type or "").strip() or OTHER_TYPE,
                "distance_m": sanitize(a.distance_m),
                "moving_time_sec": sanitize(a.moving_time_sec),
                "elevation_m": sanitize(a.elevation_m),
                "effort_score": a.effort_score,
            }
        )
    if skipped:
        logger.warning("Dropped %d activity(ies) without a usable start", skipped)

    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    if df.empty:
        return df
    return df.sort_values(["date", "local_start"], kind="stable").reset_index(drop=True)


def _wall_clock(ts: object, tz: tzinfo | None) -> datetime | None:
    """Local wall-clock time without tzinfo, used only for ordering."""
    if isinstance(ts, str):
        return None
    if isinstance(ts, pd.Timestamp):
        ts = ts.to_pydatetime()
    if not isinstance(ts, datetime):
        return None
    if ts.tzinfo is not None and tz is not None:
        ts = ts.astimezone(tz)
    return ts.replace(tzinfo=None)


def moving_minutes(seconds: float) -> int:
    """Seconds to whole minutes; any movement counts as at least one minute."""
    seconds = sanitize(seconds)
    if seconds <= 0:
        return 0
    return max(1, round_half_up(seconds / 60))


def daily_totals(
    frame: pd.DataFrame, unit: DistanceUnit = DistanceUnit.MILES
) -> pd.DataFrame:
    """Aggregate activities by local day.

    Returns DataFrame columns:
        date, activities, distance, minutes, types, effort_type, effort_score
    """
    if frame.empty:
        return pd.DataFrame(columns=DAILY_COLUMNS)

    rows: list[dict[str, object]] = []
    for day, group in frame.groupby("date", sort=True):
        longest = group.loc[group["moving_time_sec"].idxmax()]
        scores = pd.to_numeric(group["effort_score"], errors="coerce").dropna()
        rows.append(
            {
                "date": day,
                "activities": len(group),
                "distance": float(group["distance_m"].sum()) / unit.metres,
                "minutes": moving_minutes(float(group["moving_time_sec"].sum())),
                "types": tuple(dict.fromkeys(group["type"])),
                "effort_type": longest["type"],
                "effort_score": float(scores.max()) if not scores.empty else None,
            }
        )
    return pd.DataFrame(rows, columns=DAILY_COLUMNS)


def day_records_from_totals(daily: pd.DataFrame) -> list[DayRecord]:
    """Turn the daily totals frame into unscored day records."""
    records: list[DayRecord] = []
    for row in daily.itertuples(index=False):
        records.append(
            make_day_record(
                row.date,
                row.activities,
                row.minutes,
                row.distance,
                row.types,
                effort_score=_optional_number(row.effort_score),
                effort_type=row.effort_type,
            )
        )
    return records


def day_records_from_rows(
    rows: Iterable[Mapping[str, object]], unit: DistanceUnit = DistanceUnit.MILES
) -> list[DayRecord]:
    """Build day records from already aggregated per-day rows.

    Each row uses the keys ``date``, ``activities``, ``distanceM``,
    ``movingTimeSec``, ``types`` and optionally ``effortScore``,
    ``effortMetric``, ``effortValue`` and ``effortType``. Rows with an
    invalid date are skipped; a repeated date replaces the earlier row.
    """
    by_day: dict[str, DayRecord] = {}
    invalid = 0
    for row in rows:
        day = parse_day_key(row.get("date"))
        if day is None:
            invalid += 1
            continue
        record = make_day_record(
            day,
            row.get("activities"),
            moving_minutes(sanitize(row.get("movingTimeSec"))),
            sanitize(row.get("distanceM")) / unit.metres,
            row.get("types"),
            effort_score=_optional_number(row.get("effortScore")),
            effort_metric=row.get("effortMetric"),
            effort_value=_optional_number(row.get("effortValue")),
            effort_type=row.get("effortType"),
        )
        by_day[record.key] = record
    if invalid:
        logger.warning("Skipped %d day row(s) with an invalid date", invalid)
    return [by_day[k] for k in sorted(by_day)]


def _optional_number(value: object) -> object:
    """None for missing values (None, NaN, NA), the value otherwise."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    return value


def recap_totals(frame: pd.DataFrame) -> RecapTotals:
    """Totals over every activity of the frame."""
    if frame.empty:
        return RecapTotals(activities=0, distance_m=0.0, moving_time_sec=0.0, elevation_m=0.0)
    return RecapTotals(
        activities=len(frame),
        distance_m=float(frame["distance_m"].sum()),
        moving_time_sec=float(frame["moving_time_sec"].sum()),
        elevation_m=float(frame["elevation_m"].sum()),
    )


def type_breakdown(frame: pd.DataFrame) -> list[TypeBreakdown]:
    """Totals per activity type, most moving time first."""
    if frame.empty:
        return []
    g = frame.groupby("type", as_index=False, sort=True).agg(
        activities=("distance_m", "count"),
        distance_m=("distance_m", "sum"),
        moving_time_sec=("moving_time_sec", "sum"),
        elevation_m=("elevation_m", "sum"),
    )
    g = g.sort_values("moving_time_sec", ascending=False, kind="stable")
    return [
        TypeBreakdown(
            activity_type=str(row.type),
            activities=int(row.activities),
            distance_m=float(row.distance_m),
            moving_time_sec=float(row.moving_time_sec),
            elevation_m=float(row.elevation_m),
        )
        for row in g.itertuples(index=False)
    ]


def heatmap_summary(days: Sequence[DayRecord]) -> HeatmapSummary:
    """Active days, activities and days of the window."""
    active = sum(1 for d in days if d.is_active)
    total_days = len(days)
    pct = round_half_up(active / total_days * 100) if total_days else 0
    return HeatmapSummary(
        active_days=active,
        total_activities=sum(d.activity_count for d in days),
        total_days=total_days,
        active_pct=pct,
    )
