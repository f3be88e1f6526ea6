"""Esfuerzo diario: métrica por día, puntaje relativo 0-100 y nivel 0-4."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date

from recap_tool.activity_types import is_duration_style, normalize_types
from recap_tool.dates import parse_day_key
from recap_tool.model import DayRecord, EffortMetric

MAX_SCORE = 100
LEVEL_THRESHOLDS: tuple[int, ...] = (25, 50, 75)


def sanitize(value: object) -> float:
    """Coerce to a finite non-negative float (anything else -> 0)."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def resolve_daily_effort(
    count: int,
    distance: float,
    minutes: float,
    types: Iterable[str],
) -> tuple[EffortMetric, float]:
    """Pick the metric that represents a day's intensity.

    First matching rule wins:

    1. a distance-style type and some distance -> distance
    2. only duration-style types and some time -> time
    3. some distance -> distance
    4. some time -> time
    5. activities without distance or time -> time with a nominal value of 1,
       so the day still stands out from a rest day
    6. otherwise none
    """
    count = int(sanitize(count))
    distance = sanitize(distance)
    minutes = sanitize(minutes)
    labels = normalize_types(types)

    has_distance_type = any(not is_duration_style(t) for t in labels)
    only_duration_types = bool(labels) and all(is_duration_style(t) for t in labels)

    if has_distance_type and distance > 0:
        return EffortMetric.DISTANCE, distance
    if only_duration_types and minutes > 0:
        return EffortMetric.TIME, minutes
    if distance > 0:
        return EffortMetric.DISTANCE, distance
    if minutes > 0:
        return EffortMetric.TIME, minutes
    if count > 0:
        return EffortMetric.TIME, 1.0
    return EffortMetric.NONE, 0.0


def clamp_score(score: object) -> int:
    """Clamp a caller-supplied score into 0..100."""
    return min(MAX_SCORE, round_half_up(sanitize(score)))


def make_day_record(
    day: date | str,
    count: object = 0,
    total_minutes: object = 0,
    total_distance: object = 0,
    types: object = (),
    *,
    effort_score: object = None,
    effort_metric: object = None,
    effort_value: object = None,
    effort_type: object = None,
) -> DayRecord:
    """Build a sanitized DayRecord with its effort resolved.

    The day may be a date, a datetime (truncated) or a day key; a day that
    cannot be parsed is kept as given and dropped later by the recap.
    Counts and minutes are rounded to whole numbers. A caller metric is only
    honoured when it is ``distance`` or ``time``, and its value replaces the
    resolved one. A day without activities is always a rest day: metric none,
    value 0 and no authoritative score.
    """
    parsed_day = parse_day_key(day)
    activity_count = round_half_up(sanitize(count))
    minutes = round_half_up(sanitize(total_minutes))
    distance = sanitize(total_distance)
    labels = normalize_types(types)

    metric, value = resolve_daily_effort(activity_count, distance, minutes, labels)
    caller_metric = _parse_metric(effort_metric)
    if caller_metric is not None:
        metric = caller_metric
        if effort_value is not None:
            value = sanitize(effort_value)

    score = None if effort_score is None else clamp_score(effort_score)
    label = effort_type.strip() if isinstance(effort_type, str) else ""

    if activity_count == 0:
        metric, value, score = EffortMetric.NONE, 0.0, None

    return DayRecord(
        day=parsed_day if parsed_day is not None else day,
        activity_count=activity_count,
        total_duration_minutes=minutes,
        total_distance=distance,
        activity_types=labels,
        effort_metric=metric,
        effort_value=value,
        effort_score=score,
        effort_type=label or None,
        level=0,
    )


def _parse_metric(value: object) -> EffortMetric | None:
    if isinstance(value, EffortMetric):
        metric = value
    elif isinstance(value, str) and value.strip().lower() in ("distance", "time"):
        metric = EffortMetric(value.strip().lower())
    else:
        return None
    return None if metric is EffortMetric.NONE else metric


def score_to_level(score: float) -> int:
    """Bucket a 0..100 score into the five calendar levels."""
    if score <= 0:
        return 0
    for level, threshold in enumerate(LEVEL_THRESHOLDS, start=1):
        if score <= threshold:
            return level
    return 4


def max_effort(days: Iterable[DayRecord], metric: EffortMetric) -> float:
    """Largest effort value among the days using ``metric``."""
    return max(
        (d.effort_value for d in days if d.effort_metric is metric),
        default=0.0,
    )


def normalize_efforts(days: Sequence[DayRecord]) -> list[DayRecord]:
    """Score every day relative to the window and attach its level.

    Days carrying a score keep it (clamped). The rest are scaled against the
    largest value of their own metric family in ``days``. Returns new
    records; the input is left untouched.
    """
    max_distance = max_effort(days, EffortMetric.DISTANCE)
    max_time = max_effort(days, EffortMetric.TIME)

    out: list[DayRecord] = []
    for day in days:
        if day.effort_score is not None:
            score = clamp_score(day.effort_score)
        elif day.effort_metric is EffortMetric.DISTANCE and max_distance > 0:
            score = round_half_up(day.effort_value / max_distance * MAX_SCORE)
        elif day.effort_metric is EffortMetric.TIME and max_time > 0:
            score = round_half_up(day.effort_value / max_time * MAX_SCORE)
        else:
            score = 0
        out.append(replace(day, effort_score=score, level=score_to_level(score)))
    return out
