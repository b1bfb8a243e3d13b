from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from core.domain.activity import Activity
from core.domain.curve import TimeSeriesPoint
from core.domain.enums import ReportingInterval
from core.domain.snapshot import ScheduleSnapshot
from core.services.evm.cost_model import ActualCostModel, AssumedEfficiencyCostModel
from core.services.evm.periods import aggregate_points
from core.services.evm.policy import parse_interval

logger = logging.getLogger(__name__)


def curve_activities(snapshot: ScheduleSnapshot) -> List[Activity]:
    """Task leaves; groups are aggregates and milestones carry no work."""
    leaf_ids = {a.id for a in snapshot.leaves()}
    return [a for a in snapshot.activities if a.id in leaf_ids and a.is_work_item]


def build_curve(
    leaf_activities: Iterable[Activity],
    total_budget: float,
    interval: Optional[ReportingInterval | str] = None,
    *,
    as_of: Optional[date] = None,
    cost_model: Optional[ActualCostModel] = None,
) -> List[TimeSeriesPoint]:
    """
    Time-phased planned/earned/actual value series.

    One point per calendar day from the earliest start to the latest end,
    every activity weighted equally:
    - planned fraction: 0 before start, 1 from end on, linear in between
    - earned fraction (days up to as_of): reported progress spread linearly
      over the part of the activity elapsed by as_of
    - days after as_of have no actuals

    PV and EV are the percentages applied to the budget; AC comes from the
    cost model and is an estimate unless the host reports real actuals.
    """
    activities = list(leaf_activities)
    resolved_interval = parse_interval(interval)
    if not activities:
        logger.info("No work items to plan; S-curve is empty")
        return []

    budget = max(0.0, float(total_budget or 0.0))
    as_of = as_of or date.today()
    model = cost_model if cost_model is not None else AssumedEfficiencyCostModel()

    first = min(a.start for a in activities)
    last = max(a.end for a in activities)
    days = [first + timedelta(days=i) for i in range((last - first).days + 1)]
    count = len(activities)

    planned = [100.0 * sum(_planned_fraction(a, d) for a in activities) / count for d in days]
    planned[-1] = 100.0
    actual = [
        100.0 * sum(_earned_fraction(a, d, as_of) for a in activities) / count if d <= as_of else None
        for d in days
    ]

    daily = [_point(d, p, a, budget, model) for d, p, a in zip(days, planned, actual)]
    logger.debug(
        "S-curve: %d activities over %d days (%s to %s), as of %s",
        count,
        len(days),
        first.isoformat(),
        last.isoformat(),
        as_of.isoformat(),
    )
    if resolved_interval == ReportingInterval.DAY:
        return daily
    return aggregate_points(daily, resolved_interval)


def _planned_fraction(activity: Activity, day: date) -> float:
    if day < activity.start:
        return 0.0
    if day >= activity.end:
        return 1.0
    return ((day - activity.start).days + 1) / activity.duration_days


def _elapsed_days(activity: Activity, day: date) -> int:
    return max(0, min(activity.duration_days, (day - activity.start).days + 1))


def _earned_fraction(activity: Activity, day: date, as_of: date) -> float:
    if activity.progress <= 0:
        return 0.0
    reported = activity.progress / 100.0
    reference = _elapsed_days(activity, as_of)
    if reference == 0:
        # reported progress on work not due to start yet
        return reported if day == as_of else 0.0
    return min(reported, max(0.0, _elapsed_days(activity, day) / reference * reported))


def _point(
    day: date,
    planned_percent: float,
    actual_percent: Optional[float],
    budget: float,
    model: ActualCostModel,
) -> TimeSeriesPoint:
    pv = planned_percent / 100.0 * budget
    ev = None if actual_percent is None else actual_percent / 100.0 * budget
    ac = None if ev is None else model.estimate(day, ev)

    spi = ev / pv if ev is not None and pv > 0 else 1.0
    cpi = ev / ac if ev is not None and ac else 1.0
    return TimeSeriesPoint(
        period_label=day.isoformat(),
        period_end=day,
        planned_percent=planned_percent,
        actual_percent=actual_percent,
        planned_value=pv,
        earned_value=ev,
        actual_cost=ac,
        schedule_performance_index=spi,
        cost_performance_index=cpi,
    )


__all__ = ["build_curve", "curve_activities"]
