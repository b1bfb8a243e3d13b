from infra.db.schedule.mapper import (
    activity_from_orm,
    activity_to_orm,
    schedule_from_orm,
    schedule_to_orm,
)
from infra.db.schedule.repository import SqlAlchemyScheduleRepository

__all__ = [
    "activity_to_orm",
    "activity_from_orm",
    "schedule_to_orm",
    "schedule_from_orm",
    "SqlAlchemyScheduleRepository",
]
