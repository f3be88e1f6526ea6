"""Modelos tipados para actividades, días del período y la grilla semanal."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum


class EffortMetric(str, Enum):
    """Metric used to express the intensity of a day."""

    DISTANCE = "distance"
    TIME = "time"
    NONE = "none"


class ActivityStyle(str, Enum):
    """How effort is best expressed for an activity type."""

    DISTANCE = "distance"
    DURATION = "duration"


class DistanceUnit(Enum):
    """Distance unit used when aggregating raw metres."""

    MILES = 1609.344
    KILOMETERS = 1000.0

    @property
    def metres(self) -> float:
        return float(self.value)

    @property
    def label(self) -> str:
        return "mi" if self is DistanceUnit.MILES else "km"


@dataclass(frozen=True)
class ActivityRecord:
    """One raw activity as delivered by the upstream source."""

    start: datetime
    activity_type: str
    distance_m: float = 0.0
    moving_time_sec: float = 0.0
    elevation_m: float = 0.0
    effort_score: float | None = None


@dataclass(frozen=True)
class DayRecord:
    """Aggregated totals and effort of one calendar day."""

    day: date
    activity_count: int = 0
    total_duration_minutes: int = 0
    total_distance: float = 0.0
    activity_types: tuple[str, ...] = ()
    effort_metric: EffortMetric = EffortMetric.NONE
    effort_value: float = 0.0
    effort_score: int | None = None
    effort_type: str | None = None
    level: int = 0

    @property
    def key(self) -> str:
        return self.day.strftime("%Y-%m-%d")

    @property
    def is_active(self) -> bool:
        return self.activity_count > 0


@dataclass(frozen=True)
class WindowBounds:
    """Inclusive reporting window (local calendar days)."""

    start: date
    end: date

    @classmethod
    def normalized(cls, start: date, end: date) -> WindowBounds:
        """Build bounds, swapping them when given in reverse order."""
        if start > end:
            start, end = end, start
        return cls(start=start, end=end)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def dates(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(self.days)]


@dataclass(frozen=True)
class GridCell:
    """One calendar cell; ``day`` is None for structural padding."""

    day: date | None
    outside: bool
    record: DayRecord | None = None

    @property
    def level(self) -> int:
        return self.record.level if self.record is not None else 0

    @property
    def activity_count(self) -> int:
        return self.record.activity_count if self.record is not None else 0


@dataclass(frozen=True)
class WeekColumn:
    """Seven cells, Monday to Sunday."""

    index: int
    month_label: str | None
    cells: tuple[GridCell, ...]


@dataclass(frozen=True)
class StreakMetrics:
    """Consistency metrics over a set of active days."""

    longest_streak_days: int = 0
    best_seven_day_window_count: int = 0
    best_window_start: date | None = None


@dataclass(frozen=True)
class HeatmapSummary:
    """Counts shown next to the calendar."""

    active_days: int
    total_activities: int
    total_days: int
    active_pct: int


@dataclass(frozen=True)
class RecapTotals:
    """Totals over all activities of the window."""

    activities: int
    distance_m: float
    moving_time_sec: float
    elevation_m: float


@dataclass(frozen=True)
class TypeBreakdown:
    """Totals for one activity type."""

    activity_type: str
    activities: int
    distance_m: float
    moving_time_sec: float
    elevation_m: float


@dataclass(frozen=True)
class Recap:
    """Everything derived for one reporting window."""

    window: WindowBounds
    streaks: StreakMetrics
    days: list[DayRecord]
    weeks: list[WeekColumn]
    summary: HeatmapSummary
    totals: RecapTotals | None = None
    breakdown: list[TypeBreakdown] = field(default_factory=list)
