from __future__ import annotations

import random
from datetime import date, timedelta

from recap_tool.model import StreakMetrics
from recap_tool.streaks import (
    best_seven_day_window,
    densest_window,
    longest_streak,
    streak_metrics,
)


def test_empty_input() -> None:
    assert longest_streak([]) == 0
    assert best_seven_day_window([]) == 0
    assert densest_window([]) == (0, None)
    assert streak_metrics([]) == StreakMetrics(0, 0, None)


def test_single_day() -> None:
    assert longest_streak(["2024-01-01"]) == 1
    assert best_seven_day_window(["2024-01-01"]) == 1


def test_longest_streak_broken_by_gap() -> None:
    days = ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-05"]
    assert longest_streak(days) == 3


def test_longest_streak_later_run_wins() -> None:
    days = ["2024-01-01", "2024-01-03", "2024-01-04", "2024-01-05", "2024-01-06"]
    assert longest_streak(days) == 4


def test_longest_streak_across_month_and_year() -> None:
    days = ["2023-12-30", "2023-12-31", "2024-01-01", "2024-03-01"]
    assert longest_streak(days) == 3


def test_best_seven_day_window() -> None:
    days = ["2024-01-01", "2024-01-02", "2024-01-04", "2024-01-06", "2024-01-10"]
    assert best_seven_day_window(days) == 4
    assert densest_window(days) == (4, date(2024, 1, 1))


def test_best_window_caps_at_seven() -> None:
    start = date(2024, 5, 1)
    days = [start + timedelta(days=i) for i in range(10)]
    assert best_seven_day_window(days) == 7
    assert longest_streak(days) == 10


def test_window_span_is_inclusive_seven_days() -> None:
    # Jan 1 and Jan 7 fit in one window, Jan 8 does not
    assert best_seven_day_window(["2024-01-01", "2024-01-07"]) == 2
    assert best_seven_day_window(["2024-01-01", "2024-01-08"]) == 1


def test_duplicates_and_mixed_inputs_collapse() -> None:
    days = ["2024-01-01", date(2024, 1, 1), "2024-01-02", " 2024-01-02 "]
    assert longest_streak(days) == 2
    assert best_seven_day_window(days) == 2


def test_invalid_keys_are_skipped() -> None:
    days = ["2024-01-01", "bogus", "2024-01-02", "2024-13-01", None]
    metrics = streak_metrics(days)
    assert metrics.longest_streak_days == 2
    assert metrics.best_seven_day_window_count == 2


def test_order_independent_and_repeatable() -> None:
    days = [f"2024-02-{d:02d}" for d in (1, 2, 3, 7, 8, 12, 13, 14, 15, 20)]
    expected = streak_metrics(days)
    shuffled = list(days)
    random.Random(7).shuffle(shuffled)
    assert streak_metrics(shuffled) == expected
    assert streak_metrics(days) == expected
    assert expected.longest_streak_days == 4
    assert expected.best_seven_day_window_count == 4
    assert expected.best_window_start == date(2024, 2, 1)
