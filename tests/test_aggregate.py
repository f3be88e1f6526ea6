from __future__ import annotations

import logging
from datetime import date, datetime, timezone

import pytest
from dateutil import tz

from recap_tool.aggregate import (
    DAILY_COLUMNS,
    FRAME_COLUMNS,
    activities_to_frame,
    daily_totals,
    day_records_from_rows,
    day_records_from_totals,
    heatmap_summary,
    moving_minutes,
    recap_totals,
    type_breakdown,
)
from recap_tool.effort import make_day_record
from recap_tool.model import ActivityRecord, DistanceUnit, EffortMetric

MILE = 1609.344


def _activities() -> list[ActivityRecord]:
    return [
        ActivityRecord(datetime(2024, 1, 1, 7, 0), "Run", 5 * MILE, 1800, 40.0),
        ActivityRecord(datetime(2024, 1, 1, 18, 0), "Yoga", 0.0, 2400),
        ActivityRecord(datetime(2024, 1, 2, 9, 0), "Ride", 20 * MILE, 3600, 210.0, 65.0),
    ]


def test_activities_to_frame_empty() -> None:
    df = activities_to_frame([])
    assert df.empty
    assert list(df.columns) == FRAME_COLUMNS


def test_activities_to_frame_local_day_and_order() -> None:
    ny = tz.gettz("America/New_York")
    acts = [
        ActivityRecord(datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc), "Run", 1000, 600),
        ActivityRecord(datetime(2024, 1, 2, 2, 0, tzinfo=timezone.utc), "", -5, float("nan")),
    ]
    df = activities_to_frame(acts, ny)
    assert list(df["date"]) == [date(2024, 1, 1), date(2024, 1, 2)]
    assert df.loc[0, "type"] == "Other"
    assert df.loc[0, "distance_m"] == 0.0
    assert df.loc[0, "moving_time_sec"] == 0.0


def test_activities_to_frame_drops_unusable_start(caplog: pytest.LogCaptureFixture) -> None:
    acts = [
        ActivityRecord("garbage", "Run", 1000, 600),  # type: ignore[arg-type]
        ActivityRecord(datetime(2024, 1, 1, 8, 0), "Run", 1000, 600),
    ]
    with caplog.at_level(logging.WARNING, logger="recap_tool.aggregate"):
        df = activities_to_frame(acts)
    assert len(df) == 1
    assert "Dropped 1" in caplog.text


@pytest.mark.parametrize(
    ("seconds", "minutes"),
    [(0, 0), (-5, 0), (10, 1), (89, 1), (90, 2), (3600, 60)],
)
def test_moving_minutes(seconds: float, minutes: int) -> None:
    assert moving_minutes(seconds) == minutes


def test_daily_totals_empty() -> None:
    out = daily_totals(activities_to_frame([]))
    assert out.empty
    assert list(out.columns) == DAILY_COLUMNS


def test_daily_totals_groups_by_day() -> None:
    out = daily_totals(activities_to_frame(_activities()))
    assert list(out["date"]) == [date(2024, 1, 1), date(2024, 1, 2)]
    assert list(out["activities"]) == [2, 1]
    assert out.loc[0, "distance"] == pytest.approx(5.0)
    assert out.loc[0, "minutes"] == 70
    assert out.loc[0, "types"] == ("Run", "Yoga")
    assert out.loc[0, "effort_type"] == "Yoga"
    assert out.loc[1, "effort_score"] == 65.0


def test_daily_totals_kilometres() -> None:
    out = daily_totals(activities_to_frame(_activities()), DistanceUnit.KILOMETERS)
    assert out.loc[1, "distance"] == pytest.approx(20 * MILE / 1000)


def test_day_records_from_totals() -> None:
    records = day_records_from_totals(daily_totals(activities_to_frame(_activities())))
    assert [r.key for r in records] == ["2024-01-01", "2024-01-02"]
    first, second = records
    assert first.effort_metric is EffortMetric.DISTANCE
    assert first.effort_value == pytest.approx(5.0)
    assert first.effort_score is None
    assert second.effort_score == 65


def test_day_records_from_rows(caplog: pytest.LogCaptureFixture) -> None:
    rows = [
        {"date": "2024-01-02", "activities": 1, "distanceM": MILE, "movingTimeSec": 600, "types": ["Run"]},
        {"date": "2024-02-30", "activities": 1, "distanceM": MILE, "movingTimeSec": 600, "types": ["Run"]},
        {
            "date": "2024-01-01",
            "activities": 1,
            "distanceM": 0,
            "movingTimeSec": 2400,
            "types": ["Yoga"],
            "effortScore": 55,
            "effortType": "Yoga",
        },
        {"date": "2024-01-02", "activities": 2, "distanceM": 2 * MILE, "movingTimeSec": 1200, "types": ["Run"]},
    ]
    with caplog.at_level(logging.WARNING, logger="recap_tool.aggregate"):
        records = day_records_from_rows(rows)
    assert "invalid date" in caplog.text
    assert [r.key for r in records] == ["2024-01-01", "2024-01-02"]
    yoga, run = records
    assert yoga.effort_metric is EffortMetric.TIME
    assert yoga.total_duration_minutes == 40
    assert yoga.effort_score == 55
    assert yoga.effort_type == "Yoga"
    assert run.activity_count == 2
    assert run.total_distance == pytest.approx(2.0)
    assert run.total_duration_minutes == 20


def test_day_records_from_rows_nan_score_is_unresolved() -> None:
    rows = [{"date": "2024-01-01", "activities": 1, "distanceM": MILE, "effortScore": float("nan")}]
    (record,) = day_records_from_rows(rows)
    assert record.effort_score is None


def test_recap_totals_and_breakdown() -> None:
    frame = activities_to_frame(_activities())
    totals = recap_totals(frame)
    assert totals.activities == 3
    assert totals.moving_time_sec == 7800
    assert totals.elevation_m == 250.0

    breakdown = type_breakdown(frame)
    assert [b.activity_type for b in breakdown] == ["Ride", "Yoga", "Run"]
    assert breakdown[0].activities == 1
    assert breakdown[0].distance_m == pytest.approx(20 * MILE)


def test_recap_totals_and_breakdown_empty() -> None:
    frame = activities_to_frame([])
    assert recap_totals(frame).activities == 0
    assert type_breakdown(frame) == []


def test_heatmap_summary() -> None:
    days = [
        make_day_record(date(2024, 1, 1), 2, 30, 5, ["Run"]),
        make_day_record(date(2024, 1, 2)),
        make_day_record(date(2024, 1, 3), 1, 30, 5, ["Run"]),
    ]
    summary = heatmap_summary(days)
    assert summary.active_days == 2
    assert summary.total_activities == 3
    assert summary.total_days == 3
    assert summary.active_pct == 67
    assert heatmap_summary([]).active_pct == 0
