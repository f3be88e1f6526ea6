"""Grilla de calendario semanal (lunes primero) para el heatmap."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from recap_tool.dates import iter_days, monday_on_or_before
from recap_tool.effort import make_day_record
from recap_tool.model import DayRecord, GridCell, WeekColumn, WindowBounds

SHORT_MONTHS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
DAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
WEEK_LENGTH = 7


def index_days(days: Iterable[DayRecord]) -> dict[date, DayRecord]:
    """Map each day to its record; later records replace earlier ones."""
    return {d.day: d for d in days if isinstance(d.day, date)}


def fill_window(days: Iterable[DayRecord], bounds: WindowBounds) -> list[DayRecord]:
    """One record per day of the window, empty records for missing days."""
    by_day = index_days(days)
    return [
        by_day.get(day) or make_day_record(day)
        for day in iter_days(bounds.start, bounds.end)
    ]


def build_weeks(
    days: Iterable[DayRecord],
    start: date,
    end: date,
    *,
    month_labels: Sequence[str] = SHORT_MONTHS,
) -> list[WeekColumn]:
    """Lay the window out as Monday-first week columns.

    The grid starts on the Monday on or before ``start``. Days before
    ``start`` or after ``end`` are marked outside; the last week is padded
    with filler cells so every column has exactly seven cells. A week gets a
    month label when the month of its first visible day has not been
    labeled yet.

    Args:
        days: Level-annotated records; dates without one render as rest days.
        start: First day of the window.
        end: Last day of the window (swapped with start when earlier).
        month_labels: Twelve labels, January first.

    Returns:
        Week columns in order, indexed from 0.
    """
    bounds = WindowBounds.normalized(start, end)
    by_day = index_days(days)

    weeks: list[WeekColumn] = []
    current: list[GridCell] = []
    last_labeled: tuple[int, int] | None = None

    for day in iter_days(monday_on_or_before(bounds.start), bounds.end):
        outside = not bounds.contains(day)
        record = by_day.get(day) or make_day_record(day)
        current.append(GridCell(day=day, outside=outside, record=record))

        if day.weekday() != 6 and day < bounds.end:
            continue

        label = None
        month = _first_visible_month(current)
        # cursor only moves forward
        if month is not None and (last_labeled is None or month > last_labeled):
            label = month_labels[month[1] - 1]
            last_labeled = month

        while len(current) < WEEK_LENGTH:
            current.append(GridCell(day=None, outside=True))

        weeks.append(WeekColumn(index=len(weeks), month_label=label, cells=tuple(current)))
        current = []

    return weeks


def _first_visible_month(cells: Sequence[GridCell]) -> tuple[int, int] | None:
    for cell in cells:
        if not cell.outside and cell.day is not None:
            return cell.day.year, cell.day.month
    return None
