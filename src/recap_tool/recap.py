"""Recap completo de un período: días, grilla, rachas y totales."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date, tzinfo

from recap_tool.aggregate import (
    activities_to_frame,
    daily_totals,
    day_records_from_totals,
    heatmap_summary,
    recap_totals,
    type_breakdown,
)
from recap_tool.calendar_grid import SHORT_MONTHS, build_weeks, fill_window
from recap_tool.dates import active_day_keys, parse_day_key
from recap_tool.effort import normalize_efforts
from recap_tool.model import (
    ActivityRecord,
    DayRecord,
    DistanceUnit,
    Recap,
    RecapTotals,
    StreakMetrics,
    TypeBreakdown,
    WindowBounds,
)
from recap_tool.streaks import streak_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecapConfig:
    """Configuration for building a recap."""

    tz: tzinfo | None = None
    unit: DistanceUnit = DistanceUnit.MILES
    month_labels: tuple[str, ...] = SHORT_MONTHS


def build_recap(
    activities: Iterable[ActivityRecord],
    start: date,
    end: date,
    config: RecapConfig | None = None,
) -> Recap:
    """Build the recap of the window from raw activities.

    Args:
        activities: Raw activities; those outside the window are ignored.
        start: First day of the window.
        end: Last day of the window (swapped with start when earlier).
        config: Time zone, distance unit and month labels.

    Returns:
        Recap with scored days, calendar weeks, streaks and totals.
    """
    config = config or RecapConfig()
    bounds = WindowBounds.normalized(start, end)

    frame = activities_to_frame(activities, config.tz)
    if not frame.empty:
        mask = frame["date"].map(bounds.contains)
        frame = frame.loc[mask].reset_index(drop=True)

    days = day_records_from_totals(daily_totals(frame, config.unit))
    active_keys = active_day_keys(frame["start"], config.tz)
    return build_recap_from_days(
        days,
        bounds.start,
        bounds.end,
        month_labels=config.month_labels,
        totals=recap_totals(frame),
        breakdown=type_breakdown(frame),
        streaks=streak_metrics(active_keys),
    )


def build_recap_from_days(
    days: Iterable[DayRecord],
    start: date,
    end: date,
    *,
    month_labels: Sequence[str] = SHORT_MONTHS,
    totals: RecapTotals | None = None,
    breakdown: list[TypeBreakdown] | None = None,
    streaks: StreakMetrics | None = None,
) -> Recap:
    """Build the recap from per-day aggregates already held by the caller.

    Records whose day does not parse are skipped with a warning. Streaks are
    computed from the active days unless the caller passes them already.
    """
    bounds = WindowBounds.normalized(start, end)
    in_window = [d for d in _usable_days(days) if bounds.contains(d.day)]
    scored = normalize_efforts(fill_window(in_window, bounds))
    weeks = build_weeks(scored, bounds.start, bounds.end, month_labels=month_labels)
    if streaks is None:
        streaks = streak_metrics(d.day for d in scored if d.is_active)

    logger.debug(
        "Recap %s..%s: %d days, %d weeks", bounds.start, bounds.end, len(scored), len(weeks)
    )
    return Recap(
        window=bounds,
        streaks=streaks,
        days=scored,
        weeks=weeks,
        summary=heatmap_summary(scored),
        totals=totals,
        breakdown=breakdown or [],
    )


def _usable_days(days: Iterable[DayRecord]) -> list[DayRecord]:
    usable: list[DayRecord] = []
    invalid: list[object] = []
    for record in days:
        day = parse_day_key(record.day)
        if day is None:
            invalid.append(record.day)
            continue
        usable.append(record if type(record.day) is date else replace(record, day=day))
    if invalid:
        logger.warning("Skipped %d day record(s) with invalid date: %r", len(invalid), invalid[:5])
    return usable
