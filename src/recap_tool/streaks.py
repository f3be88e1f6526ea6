"""Métricas de constancia: racha más larga y mejor ventana de 7 días."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from recap_tool.dates import parse_days
from recap_tool.model import StreakMetrics

WINDOW_DAYS = 7


def longest_streak(days: Iterable[object]) -> int:
    """Longest run of consecutive calendar days.

    Args:
        days: Day keys (``YYYY-MM-DD``) or dates, in any order. Duplicates
            collapse and invalid keys are skipped.

    Returns:
        Length of the longest run, 0 for no days.
    """
    return _longest_run(parse_days(days))


def best_seven_day_window(days: Iterable[object]) -> int:
    """Maximum number of distinct active days inside any 7-day span."""
    count, _ = densest_window(days)
    return count


def densest_window(days: Iterable[object]) -> tuple[int, date | None]:
    """Densest 7-day span: (active days in it, first day of the span).

    When several spans tie, the earliest one wins.
    """
    return _densest(parse_days(days))


def streak_metrics(days: Iterable[object]) -> StreakMetrics:
    """Compute every consistency metric from one pass over the parsed days."""
    ordered = parse_days(days)
    count, window_start = _densest(ordered)
    return StreakMetrics(
        longest_streak_days=_longest_run(ordered),
        best_seven_day_window_count=count,
        best_window_start=window_start,
    )


def _longest_run(ordered: list[date]) -> int:
    if not ordered:
        return 0
    best = current = 1
    for prev, day in zip(ordered, ordered[1:]):
        current = current + 1 if (day - prev).days == 1 else 1
        best = max(best, current)
    return best


def _densest(ordered: list[date]) -> tuple[int, date | None]:
    best = 0
    best_start: date | None = None
    left = 0
    for right, day in enumerate(ordered):
        while (day - ordered[left]).days > WINDOW_DAYS - 1:
            left += 1
        size = right - left + 1
        if size > best:
            best = size
            best_start = ordered[left]
    return best, best_start
