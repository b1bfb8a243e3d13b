from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, Iterable, List, Optional

from core.domain.activity import Activity
from core.exceptions import NotFoundError


@dataclass(frozen=True)
class ScheduleConstraints:
    """Hard project bounds forced onto the root group after rollup."""
    start: Optional[date] = None
    finish: Optional[date] = None


@dataclass(frozen=True)
class ScheduleSnapshot:
    """
    One point-in-time schedule: the ordered, flattened activity collection.

    Treated as a value. Engine stages return new snapshots and never modify the
    one they were given.
    """
    activities: tuple[Activity, ...]
    root_id: str
    constraints: ScheduleConstraints = field(default_factory=ScheduleConstraints)
    cpm_fingerprint: Optional[str] = None

    def __len__(self) -> int:
        return len(self.activities)

    def __iter__(self):
        return iter(self.activities)

    @property
    def root(self) -> Activity:
        return self.get(self.root_id)

    def by_id(self) -> Dict[str, Activity]:
        return {a.id: a for a in self.activities}

    def get(self, activity_id: str) -> Activity:
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        raise NotFoundError(f"Activity {activity_id!r} not found.", code="ACTIVITY_NOT_FOUND")

    def children_map(self) -> Dict[str, List[str]]:
        children: Dict[str, List[str]] = {}
        for activity in self.activities:
            if activity.parent_id is not None:
                children.setdefault(activity.parent_id, []).append(activity.id)
        return children

    def leaves(self) -> List[Activity]:
        """Activities that own no children, in snapshot order."""
        parents = {a.parent_id for a in self.activities if a.parent_id is not None}
        return [a for a in self.activities if a.id not in parents]

    def with_activities(self, activities: Iterable[Activity], **changes) -> "ScheduleSnapshot":
        return replace(self, activities=tuple(activities), **changes)


__all__ = ["ScheduleConstraints", "ScheduleSnapshot"]
