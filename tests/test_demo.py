from __future__ import annotations

from datetime import date

from recap_tool.demo import hash_seed, sample_day, sample_days, seeded_random


def test_hash_seed_is_stable_and_positive() -> None:
    assert hash_seed("") == 1
    assert hash_seed("a") == 97
    assert hash_seed("ab") == 97 * 31 + 98
    assert hash_seed("2024-01-01") == hash_seed("2024-01-01")


def test_seeded_random_range_and_repeatability() -> None:
    a = seeded_random(42)
    b = seeded_random(42)
    values = [a() for _ in range(50)]
    assert values == [b() for _ in range(50)]
    assert all(0 <= v < 1 for v in values)


def test_sample_days_cover_window_and_repeat() -> None:
    days = sample_days(date(2024, 1, 31), date(2024, 1, 1))
    assert len(days) == 31
    assert days[0].day == date(2024, 1, 1)
    assert days == sample_days(date(2024, 1, 1), date(2024, 1, 31))
    assert sample_day(date(2024, 1, 15)) == days[14]


def test_sample_days_respect_invariants() -> None:
    days = sample_days(date(2024, 1, 1), date(2024, 6, 30))
    assert any(d.is_active for d in days)
    assert any(not d.is_active for d in days)
    for d in days:
        assert d.level == 0
        assert d.effort_value >= 0
        if not d.is_active:
            assert d.effort_value == 0
        else:
            assert 1 <= d.activity_count <= 2
            assert d.total_duration_minutes >= 30
