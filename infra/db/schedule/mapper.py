from __future__ import annotations

from typing import List

from core.domain.activity import Activity
from core.domain.record import ScheduleRecord
from core.domain.snapshot import ScheduleConstraints, ScheduleSnapshot
from infra.db.models import ActivityORM, ScheduleORM


def activity_to_orm(activity: Activity, position: int) -> ActivityORM:
    return ActivityORM(
        position=position,
        activity_id=activity.id,
        kind=activity.kind,
        name=activity.name,
        start_date=activity.start,
        end_date=activity.end,
        progress=activity.progress,
        cost=activity.cost,
        resource=activity.resource,
        parent_id=activity.parent_id,
        depth=activity.depth,
        dependencies=list(activity.dependencies),
        adjustments=list(activity.adjustments),
    )


def activity_from_orm(obj: ActivityORM) -> Activity:
    return Activity(
        id=obj.activity_id,
        kind=obj.kind,
        name=obj.name,
        start=obj.start_date,
        end=obj.end_date,
        progress=obj.progress,
        cost=obj.cost,
        resource=obj.resource or "",
        parent_id=obj.parent_id,
        dependencies=tuple(obj.dependencies or ()),
        depth=obj.depth,
        adjustments=tuple(obj.adjustments or ()),
    )


def activities_to_orm(snapshot: ScheduleSnapshot) -> List[ActivityORM]:
    return [activity_to_orm(a, position) for position, a in enumerate(snapshot.activities)]


def schedule_to_orm(record: ScheduleRecord) -> ScheduleORM:
    snapshot = record.snapshot
    return ScheduleORM(
        id=record.id,
        name=record.name,
        root_id=snapshot.root_id,
        constraint_start=snapshot.constraints.start,
        constraint_finish=snapshot.constraints.finish,
        version=record.version,
        activities=activities_to_orm(snapshot),
    )


def schedule_from_orm(obj: ScheduleORM) -> ScheduleRecord:
    # derived critical-path values are not stored; the snapshot comes back stale
    snapshot = ScheduleSnapshot(
        activities=tuple(activity_from_orm(row) for row in obj.activities),
        root_id=obj.root_id,
        constraints=ScheduleConstraints(start=obj.constraint_start, finish=obj.constraint_finish),
    )
    return ScheduleRecord(id=obj.id, name=obj.name, snapshot=snapshot, version=obj.version)
