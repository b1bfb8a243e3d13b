from __future__ import annotations

from datetime import date

import pytest

from core.domain import Activity, ActivityKind, ReportingInterval
from core.exceptions import ValidationError
from core.services.evm import (
    AssumedEfficiencyCostModel,
    ReportedActualsCostModel,
    build_curve,
    curve_activities,
    summarize_curve,
)
from core.services.hierarchy import normalize


def _task(activity_id, start, end, progress=0, cost=0.0):
    return Activity(
        id=activity_id,
        kind=ActivityKind.TASK,
        name=activity_id,
        start=start,
        end=end,
        progress=progress,
        cost=cost,
    )


def test_single_finished_task_reaches_100_on_its_end_date():
    task = _task("A", date(2024, 3, 1), date(2024, 3, 5), progress=100)
    points = build_curve([task], 1000, "day", as_of=task.end)

    assert [p.period_label for p in points][0] == "2024-03-01"
    assert len(points) == 5
    last = points[-1]
    assert last.planned_percent == 100
    assert last.actual_percent == pytest.approx(100)
    assert last.planned_value == pytest.approx(1000)
    assert last.earned_value == pytest.approx(1000)

    first = points[0]
    assert first.planned_percent == pytest.approx(25)
    assert first.actual_percent == pytest.approx(25)
    assert first.schedule_performance_index == pytest.approx(1.0)
    assert first.cost_performance_index == pytest.approx(1.0)


def test_no_actuals_after_status_date():
    task = _task("A", date(2024, 3, 1), date(2024, 3, 5), progress=40)
    points = build_curve([task], 1000, as_of=date(2024, 3, 2))

    assert points[0].actual_percent == pytest.approx(20)
    assert points[1].actual_percent == pytest.approx(40)
    assert all(p.actual_percent is None for p in points[2:])
    assert all(p.earned_value is None and p.actual_cost is None for p in points[2:])
    # indices fall back to 1 without actuals
    assert points[3].schedule_performance_index == 1.0
    assert points[3].cost_performance_index == 1.0


def test_activities_are_weighted_equally():
    points = build_curve(
        [
            _task("A", date(2024, 3, 1), date(2024, 3, 3), progress=100, cost=10),
            _task("B", date(2024, 3, 1), date(2024, 3, 3), progress=0, cost=990),
        ],
        100,
        as_of=date(2024, 3, 3),
    )
    assert points[-1].actual_percent == pytest.approx(50)


def test_progress_reported_before_scheduled_start():
    task = _task("A", date(2024, 3, 10), date(2024, 3, 12), progress=30)
    early = _task("B", date(2024, 3, 1), date(2024, 3, 12))
    points = build_curve([task, early], 100, as_of=date(2024, 3, 4))

    by_label = {p.period_label: p for p in points}
    assert by_label["2024-03-03"].actual_percent == 0
    assert by_label["2024-03-04"].actual_percent == pytest.approx(15)


def test_zero_budget_keeps_percentages_only():
    task = _task("A", date(2024, 3, 1), date(2024, 3, 5), progress=50)
    points = build_curve([task], 0, as_of=date(2024, 3, 3))

    assert all(p.planned_value == 0 for p in points)
    assert points[0].earned_value == 0
    assert points[0].actual_cost == 0
    assert all(p.schedule_performance_index == 1.0 for p in points)
    assert all(p.cost_performance_index == 1.0 for p in points)
    assert points[2].actual_percent == pytest.approx(50)


def test_empty_schedule_gives_empty_curve():
    assert build_curve([], 1000) == []


def test_curve_uses_task_leaves_only(sample_rows):
    snapshot = normalize(sample_rows)
    assert [a.id for a in curve_activities(snapshot)] == ["1.1", "1.2", "2.1"]


def test_assumed_efficiency_scales_actual_cost():
    task = _task("A", date(2024, 3, 1), date(2024, 3, 11), progress=50)
    points = build_curve(
        [task], 1000, as_of=date(2024, 3, 5), cost_model=AssumedEfficiencyCostModel(0.8)
    )
    point = points[4]
    assert point.earned_value == pytest.approx(500)
    assert point.actual_cost == pytest.approx(625)
    assert point.cost_performance_index == pytest.approx(0.8)

    status = summarize_curve(points, 1000)
    assert status.as_of == date(2024, 3, 5)
    assert status.SPI == pytest.approx(1.0)
    assert status.EAC == pytest.approx(1250)
    assert status.VAC == pytest.approx(-250)
    assert "Cost: over budget" in status.status_text
    assert "Schedule: on track." in status.status_text
    assert "likely over budget" in status.status_text


def test_reported_actuals_are_carried_forward():
    model = ReportedActualsCostModel({date(2024, 3, 2): 100.0, date(2024, 3, 4): 300.0})
    assert model.estimate(date(2024, 3, 1), 50.0) == 0.0
    assert model.estimate(date(2024, 3, 3), 50.0) == 100.0
    assert model.estimate(date(2024, 3, 10), 50.0) == 300.0

    with pytest.raises(ValidationError):
        ReportedActualsCostModel({date(2024, 3, 2): -1.0})


def test_status_without_actuals():
    task = _task("A", date(2024, 3, 1), date(2024, 3, 5), progress=10)
    points = build_curve([task], 500, as_of=date(2024, 2, 1))

    status = summarize_curve(points, 500)
    assert status.as_of is None
    assert status.BAC == 500
    assert status.EV is None
    assert status.status_text == "No progress reported yet."


def test_configured_cost_efficiency(monkeypatch):
    monkeypatch.setenv("PM_EVM_ASSUMED_CPI", "0.5")
    assert AssumedEfficiencyCostModel().assumed_cpi == 0.5

    monkeypatch.setenv("PM_EVM_ASSUMED_CPI", "abc")
    assert AssumedEfficiencyCostModel().assumed_cpi == 1.0

    monkeypatch.setenv("PM_EVM_ASSUMED_CPI", "-2")
    assert AssumedEfficiencyCostModel().assumed_cpi == 1.0


def test_configured_default_interval(monkeypatch):
    monkeypatch.setenv("PM_REPORTING_INTERVAL", "month")
    task = _task("A", date(2024, 1, 20), date(2024, 2, 10), progress=10)
    points = build_curve([task], 100, as_of=date(2024, 1, 25))
    assert [p.period_label for p in points] == ["2024-01", "2024-02"]


def test_unknown_interval_is_rejected():
    task = _task("A", date(2024, 1, 1), date(2024, 1, 2))
    with pytest.raises(ValidationError) as exc:
        build_curve([task], 100, "fortnight")
    assert exc.value.code == "UNKNOWN_INTERVAL"
    assert build_curve([task], 100, ReportingInterval.DAY)
