from __future__ import annotations

from datetime import date

import pytest

from core.domain import Activity, ActivityKind, ReportingInterval
from core.services.evm import aggregate_points, build_curve, period_label


@pytest.fixture
def daily():
    task = Activity(
        id="A",
        kind=ActivityKind.TASK,
        name="A",
        start=date(2024, 1, 25),
        end=date(2024, 4, 5),
        progress=60,
    )
    return build_curve([task], 7000, ReportingInterval.DAY, as_of=date(2024, 2, 20))


def test_month_buckets_keep_last_daily_values(daily):
    monthly = aggregate_points(daily, ReportingInterval.MONTH)
    by_end = {p.period_end: p for p in daily}

    assert [p.period_label for p in monthly] == ["2024-01", "2024-02", "2024-03", "2024-04"]
    for bucket, last_day in zip(monthly, [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 5)]):
        source = by_end[last_day]
        assert bucket.period_end == last_day
        assert bucket.planned_value == source.planned_value
        assert bucket.earned_value == source.earned_value
        assert bucket.actual_cost == source.actual_cost
        assert bucket.planned_percent == source.planned_percent

    assert monthly[-1].planned_percent == 100


def test_quarter_and_week_labels(daily):
    quarterly = build_curve(
        [Activity(id="A", kind=ActivityKind.TASK, name="A", start=date(2024, 1, 25), end=date(2024, 4, 5))],
        100,
        "quarter",
        as_of=date(2024, 2, 1),
    )
    assert [p.period_label for p in quarterly] == ["2024-Q1", "2024-Q2"]
    assert quarterly[0].period_end == date(2024, 3, 31)

    weekly = aggregate_points(daily, ReportingInterval.WEEK)
    assert weekly[0].period_label == "2024-W04"
    assert weekly[0].period_end == date(2024, 1, 28)


def test_period_label_formats():
    assert period_label(date(2024, 1, 1), ReportingInterval.DAY) == "2024-01-01"
    assert period_label(date(2024, 1, 1), ReportingInterval.WEEK) == "2024-W01"
    assert period_label(date(2023, 12, 31), ReportingInterval.WEEK) == "2023-W52"
    assert period_label(date(2024, 11, 3), ReportingInterval.MONTH) == "2024-11"
    assert period_label(date(2024, 11, 3), ReportingInterval.QUARTER) == "2024-Q4"
