from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from core.domain.curve import EvmStatus, TimeSeriesPoint
from core.domain.enums import CorrectiveAction
from core.domain.record import ScheduleRecord
from core.domain.snapshot import ScheduleSnapshot
from core.exceptions import NotFoundError
from core.services.corrective import CompressionPolicy
from core.services.evm import ActualCostModel
from core.services.pipeline import ScheduleCriteria, ScheduleEngine
from core.services.scheduling import compute_critical_path, is_schedule_current
from infra.db.schedule import SqlAlchemyScheduleRepository
from infra.tracing import bind_trace_id

logger = logging.getLogger(__name__)


class ScheduleWorkspace:
    """
    Host-side entry point: runs engine operations on stored schedules.

    Every call binds a trace id so the log lines of one user action can be
    correlated. Writes go through the repository's version check; a stale
    expected_version raises ConcurrencyError and nothing is written.
    """

    def __init__(self, session: Session, engine: ScheduleEngine, repository: SqlAlchemyScheduleRepository):
        self._session = session
        self._engine = engine
        self._repo = repository

    def create(
        self,
        name: str,
        raw_activities: Optional[Iterable[Any]],
        criteria: Optional[ScheduleCriteria] = None,
        *,
        trace_id: str | None = None,
    ) -> ScheduleRecord:
        with bind_trace_id(trace_id):
            snapshot = self._engine.build(raw_activities, criteria)
            record = ScheduleRecord(name=name, snapshot=snapshot)
            try:
                self._repo.add(record)
                self._session.commit()
            except Exception:
                self._session.rollback()
                raise
            logger.info("Schedule %s created (%d activities)", record.id, len(snapshot))
            return record

    def load(self, schedule_id: str, *, trace_id: str | None = None) -> ScheduleRecord:
        with bind_trace_id(trace_id):
            record = self._repo.get(schedule_id)
            if record is None:
                raise NotFoundError("Schedule not found.", code="SCHEDULE_NOT_FOUND")
            if not is_schedule_current(record.snapshot):
                record.snapshot = compute_critical_path(record.snapshot)
            return record

    def edit(
        self,
        schedule_id: str,
        expected_version: int,
        activity_id: str,
        *,
        trace_id: str | None = None,
        **changes: Any,
    ) -> ScheduleRecord:
        with bind_trace_id(trace_id):
            record = self.load(schedule_id)
            snapshot = self._engine.edit(record.snapshot, activity_id, **changes)
            return self._store(record, snapshot, expected_version)

    def apply_action(
        self,
        schedule_id: str,
        expected_version: int,
        action: CorrectiveAction | str,
        *,
        trace_id: str | None = None,
    ) -> ScheduleRecord:
        with bind_trace_id(trace_id):
            record = self.load(schedule_id)
            snapshot = self._engine.apply_action(record.snapshot, action)
            return self._store(record, snapshot, expected_version)

    def curve(
        self,
        schedule_id: str,
        criteria: Optional[ScheduleCriteria] = None,
        *,
        as_of: Optional[date] = None,
        trace_id: str | None = None,
    ) -> List[TimeSeriesPoint]:
        with bind_trace_id(trace_id):
            record = self.load(schedule_id)
            return self._engine.curve(record.snapshot, criteria, as_of=as_of)

    def status(
        self,
        schedule_id: str,
        criteria: Optional[ScheduleCriteria] = None,
        *,
        as_of: Optional[date] = None,
        trace_id: str | None = None,
    ) -> EvmStatus:
        with bind_trace_id(trace_id):
            record = self.load(schedule_id)
            return self._engine.status(record.snapshot, criteria, as_of=as_of)

    def delete(self, schedule_id: str, *, trace_id: str | None = None) -> None:
        with bind_trace_id(trace_id):
            try:
                self._repo.delete(schedule_id)
                self._session.commit()
            except Exception:
                self._session.rollback()
                raise
            logger.info("Schedule %s deleted", schedule_id)

    def _store(self, record: ScheduleRecord, snapshot: ScheduleSnapshot, expected_version: int) -> ScheduleRecord:
        try:
            version = self._repo.save(record.id, snapshot, expected_version)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        record.snapshot = snapshot
        record.version = version
        return record


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    schedule_engine: ScheduleEngine
    schedule_repository: SqlAlchemyScheduleRepository
    workspace: ScheduleWorkspace

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "schedule_engine": self.schedule_engine,
            "schedule_repository": self.schedule_repository,
            "workspace": self.workspace,
        }


def build_service_graph(
    session: Session,
    policy: CompressionPolicy | None = None,
    cost_model: ActualCostModel | None = None,
) -> ServiceGraph:
    schedule_engine = ScheduleEngine(policy=policy, cost_model=cost_model)
    schedule_repository = SqlAlchemyScheduleRepository(session)
    workspace = ScheduleWorkspace(session, schedule_engine, schedule_repository)
    return ServiceGraph(
        session=session,
        schedule_engine=schedule_engine,
        schedule_repository=schedule_repository,
        workspace=workspace,
    )


__all__ = ["ScheduleWorkspace", "ServiceGraph", "build_service_graph"]
