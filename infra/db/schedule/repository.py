from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.domain.record import ScheduleRecord
from core.domain.snapshot import ScheduleSnapshot
from core.interfaces import ScheduleRepository
from infra.db.models import ScheduleORM
from infra.db.optimistic import update_with_version_check
from infra.db.schedule.mapper import activities_to_orm, schedule_from_orm, schedule_to_orm


class SqlAlchemyScheduleRepository(ScheduleRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, record: ScheduleRecord) -> None:
        self.session.add(schedule_to_orm(record))

    def get(self, schedule_id: str) -> Optional[ScheduleRecord]:
        obj = self.session.get(ScheduleORM, schedule_id)
        return schedule_from_orm(obj) if obj else None

    def list_all(self) -> List[ScheduleRecord]:
        stmt = select(ScheduleORM).order_by(ScheduleORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [schedule_from_orm(row) for row in rows]

    def save(self, schedule_id: str, snapshot: ScheduleSnapshot, expected_version: int) -> int:
        version = update_with_version_check(
            self.session,
            ScheduleORM,
            schedule_id,
            expected_version,
            {
                "root_id": snapshot.root_id,
                "constraint_start": snapshot.constraints.start,
                "constraint_finish": snapshot.constraints.finish,
            },
            not_found_message="Schedule not found.",
            stale_message="Schedule was updated by another user.",
            not_found_code="SCHEDULE_NOT_FOUND",
        )
        obj = self.session.get(ScheduleORM, schedule_id)
        # old rows must be gone before new ones reuse their activity ids
        obj.activities.clear()
        self.session.flush()
        obj.activities.extend(activities_to_orm(snapshot))
        self.session.flush()
        return version

    def delete(self, schedule_id: str) -> None:
        obj = self.session.get(ScheduleORM, schedule_id)
        if obj is not None:
            self.session.delete(obj)
