"""Datos de muestra deterministas para previsualizar el heatmap sin cuenta."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from datetime import date

from recap_tool.activity_types import is_duration_style
from recap_tool.dates import format_day_key, iter_days
from recap_tool.effort import make_day_record
from recap_tool.model import DayRecord, WindowBounds

_MODULUS = 2147483647
_MULTIPLIER = 16807
_EPOCH = date(1970, 1, 1)

SAMPLE_TYPES: tuple[str, ...] = ("Run", "Ride", "Swim", "Hike", "Workout", "Walk", "Yoga")

# Probability bias per weekday, Monday first.
_DAY_BIAS: tuple[float, ...] = (0.25, 0.72, 0.55, 0.7, 0.3, 0.65, 0.35)

# Miles per minute by primary type.
_PACE: dict[str, float] = {"Ride": 0.28, "Swim": 0.03, "Walk": 0.045, "Hike": 0.045}
_DEFAULT_PACE = 0.1


def hash_seed(text: str) -> int:
    """Stable 31-based string hash, never 0."""
    value = 0
    for ch in text:
        value = (value * 31 + ord(ch)) % _MODULUS
    return value if value > 0 else 1


def seeded_random(seed: int) -> Callable[[], float]:
    """Park-Miller generator returning floats in [0, 1)."""
    state = seed

    def _next() -> float:
        nonlocal state
        state = (state * _MULTIPLIER) % _MODULUS
        return (state - 1) / (_MODULUS - 1)

    return _next


def _sample_distance(types: Sequence[str], minutes: int, rand: Callable[[], float]) -> float:
    if not any(not is_duration_style(t) for t in types):
        return 0.0
    pace = _PACE.get(types[0], _DEFAULT_PACE)
    jitter = 0.82 + rand() * 0.36
    return round(max(0.0, minutes * pace * jitter), 2)


def sample_day(day: date) -> DayRecord:
    """Generate the sample record of one day; same day, same record."""
    rand = seeded_random(hash_seed(format_day_key(day)))
    week_num = (day - _EPOCH).days // 7
    block_phase = math.sin(week_num * 0.6) * 0.3 + 0.5
    probability = min(0.92, _DAY_BIAS[day.weekday()] * block_phase + 0.1)

    if rand() >= probability:
        return make_day_record(day)

    count = 2 if rand() < 0.12 else 1
    minutes = 30 + math.floor(rand() * 60)
    if count == 2:
        minutes += 20 + math.floor(rand() * 40)

    primary = math.floor(rand() * 3)
    types = [SAMPLE_TYPES[primary]]
    if count == 2:
        second = math.floor(rand() * len(SAMPLE_TYPES))
        if second != primary:
            types.append(SAMPLE_TYPES[second])

    distance = _sample_distance(types, minutes, rand)
    return make_day_record(day, count, minutes, distance, types)


def sample_days(start: date, end: date) -> list[DayRecord]:
    """Sample records for every day of the window."""
    bounds = WindowBounds.normalized(start, end)
    return [sample_day(day) for day in iter_days(bounds.start, bounds.end)]
