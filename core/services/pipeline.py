from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Optional

from core.domain.curve import EvmStatus, TimeSeriesPoint
from core.domain.enums import CorrectiveAction, ReportingInterval
from core.domain.snapshot import ScheduleConstraints, ScheduleSnapshot
from core.services.corrective import CompressionPolicy, apply_action
from core.services.evm import (
    ActualCostModel,
    build_curve,
    curve_activities,
    summarize_curve,
)
from core.services.hierarchy import RootMeta, normalize, update_activity
from core.services.rollup import rollup
from core.services.scheduling import compute_critical_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleCriteria:
    """Budget and reporting settings a host supplies with a schedule."""
    total_budget: float = 0.0
    currency: str = ""
    interval: Optional[ReportingInterval | str] = None
    start_date: Optional[date] = None
    finish_date: Optional[date] = None
    title: Optional[str] = None
    drop_dangling_dependencies: bool = False

    @property
    def constraints(self) -> ScheduleConstraints:
        return ScheduleConstraints(start=self.start_date, finish=self.finish_date)


class ScheduleEngine:
    """
    Wires the stages together: normalize -> rollup -> critical path, with
    corrective actions and the S-curve on top. Holds no schedule state.
    """

    def __init__(
        self,
        policy: Optional[CompressionPolicy] = None,
        cost_model: Optional[ActualCostModel] = None,
    ):
        self._policy = policy
        self._cost_model = cost_model

    def build(self, raw_activities: Optional[Iterable[Any]], criteria: Optional[ScheduleCriteria] = None) -> ScheduleSnapshot:
        criteria = criteria or ScheduleCriteria()
        snapshot = normalize(
            raw_activities,
            RootMeta(title=criteria.title, start=criteria.start_date),
            constraints=criteria.constraints,
            drop_dangling_dependencies=criteria.drop_dangling_dependencies,
        )
        result = compute_critical_path(rollup(snapshot))
        logger.info("Schedule built: %d activities", len(result))
        return result

    def edit(self, snapshot: ScheduleSnapshot, activity_id: str, **changes: Any) -> ScheduleSnapshot:
        edited = update_activity(snapshot, activity_id, **changes)
        logger.info("Activity %s edited: %s", activity_id, ", ".join(sorted(changes)))
        return compute_critical_path(rollup(edited))

    def apply_action(self, snapshot: ScheduleSnapshot, action: CorrectiveAction | str) -> ScheduleSnapshot:
        return apply_action(snapshot, action, self._policy)

    def curve(
        self,
        snapshot: ScheduleSnapshot,
        criteria: Optional[ScheduleCriteria] = None,
        *,
        as_of: Optional[date] = None,
    ) -> List[TimeSeriesPoint]:
        criteria = criteria or ScheduleCriteria()
        return build_curve(
            curve_activities(snapshot),
            criteria.total_budget,
            criteria.interval,
            as_of=as_of,
            cost_model=self._cost_model,
        )

    def status(
        self,
        snapshot: ScheduleSnapshot,
        criteria: Optional[ScheduleCriteria] = None,
        *,
        as_of: Optional[date] = None,
    ) -> EvmStatus:
        criteria = criteria or ScheduleCriteria()
        daily = build_curve(
            curve_activities(snapshot),
            criteria.total_budget,
            ReportingInterval.DAY,
            as_of=as_of,
            cost_model=self._cost_model,
        )
        return summarize_curve(daily, criteria.total_budget)


__all__ = ["ScheduleCriteria", "ScheduleEngine"]
