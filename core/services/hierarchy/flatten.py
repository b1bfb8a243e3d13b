from __future__ import annotations

import re
from dataclasses import replace
from typing import Dict, List

from core.domain.activity import Activity
from core.domain.enums import ActivityKind
from core.domain.snapshot import ScheduleSnapshot
from core.exceptions import ValidationError

_NUMERIC_PREFIX = re.compile(r"^\d+(?:\.\d+)*")
_KIND_RANK = {
    ActivityKind.GROUP: 0,
    ActivityKind.TASK: 1,
    ActivityKind.MILESTONE: 2,
}


def sibling_sort_key(activity: Activity, position: int) -> tuple:
    """
    WBS sibling order:
    - ids with a numeric dotted prefix first, compared part by part ("1.2" < "1.10")
    - then groups before tasks before milestones
    - then start date, then input position
    """
    match = _NUMERIC_PREFIX.match(activity.id)
    numeric = tuple(int(part) for part in match.group(0).split(".")) if match else ()
    return (
        0 if match else 1,
        numeric,
        _KIND_RANK.get(activity.kind, 1),
        activity.start,
        position,
    )


def flatten_activities(activities: List[Activity], root_id: str) -> List[Activity]:
    """Depth-first, parent-before-child listing annotated with depth (root = 0)."""
    position = {a.id: idx for idx, a in enumerate(activities)}
    by_id: Dict[str, Activity] = {a.id: a for a in activities}
    if len(by_id) != len(activities):
        seen: set[str] = set()
        duplicates: List[str] = []
        for activity in activities:
            if activity.id in seen and activity.id not in duplicates:
                duplicates.append(activity.id)
            seen.add(activity.id)
        raise ValidationError(
            f"Activity ids must be unique: {', '.join(duplicates)}",
            code="DUPLICATE_ID",
            activity_id=duplicates[0],
        )
    if root_id not in by_id:
        raise ValidationError(f"Root activity {root_id!r} is missing.", code="ROOT_MISSING")

    children: Dict[str, List[Activity]] = {}
    for activity in activities:
        if activity.parent_id is not None and activity.id != root_id:
            children.setdefault(activity.parent_id, []).append(activity)
    for siblings in children.values():
        siblings.sort(key=lambda a: sibling_sort_key(a, position[a.id]))

    ordered: List[Activity] = []
    visited: set[str] = set()
    stack: list[tuple[str, int]] = [(root_id, 0)]
    while stack:
        activity_id, depth = stack.pop()
        if activity_id in visited:
            continue
        visited.add(activity_id)
        activity = by_id[activity_id]
        ordered.append(activity if activity.depth == depth else replace(activity, depth=depth))
        for child in reversed(children.get(activity_id, [])):
            stack.append((child.id, depth + 1))

    if len(ordered) != len(activities):
        detached = [a.id for a in activities if a.id not in visited]
        raise ValidationError(
            f"Activities not reachable from the root: {', '.join(detached)}",
            code="TREE_DISCONNECTED",
            activity_id=detached[0],
        )
    return ordered


def flatten(snapshot: ScheduleSnapshot) -> ScheduleSnapshot:
    return snapshot.with_activities(flatten_activities(list(snapshot.activities), snapshot.root_id))


__all__ = ["flatten", "flatten_activities", "sibling_sort_key"]
