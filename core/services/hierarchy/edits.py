from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict

from core.domain.snapshot import ScheduleSnapshot
from core.exceptions import ValidationError
from core.services.hierarchy.flatten import flatten_activities
from core.services.hierarchy.parsing import (
    parse_dependencies,
    require_cost,
    require_date,
    require_progress,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"name", "start", "end", "progress", "cost", "resource", "dependencies", "parent_id"}
DERIVED_GROUP_FIELDS = {"start", "end", "progress", "cost"}


def update_activity(snapshot: ScheduleSnapshot, activity_id: str, **changes: Any) -> ScheduleSnapshot:
    """
    Apply a user edit to one activity and return a new, re-flattened snapshot.

    Group cost, progress and dates are derived from children and cannot be
    edited. The returned snapshot has no current critical-path data; callers
    re-run rollup and the critical path engine.
    """
    current = snapshot.get(activity_id)
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(
            f"Fields cannot be edited: {', '.join(sorted(unknown))}",
            code="FIELD_NOT_EDITABLE",
            activity_id=activity_id,
        )
    if current.is_group:
        derived = set(changes) & DERIVED_GROUP_FIELDS
        if derived:
            raise ValidationError(
                f"Group {activity_id} derives {', '.join(sorted(derived))} from its children.",
                code="DERIVED_FIELD",
                activity_id=activity_id,
            )

    by_id = snapshot.by_id()
    values: Dict[str, Any] = {}

    if "name" in changes:
        name = str(changes["name"] or "").strip()
        if not name:
            raise ValidationError("Activity name cannot be empty.", code="NAME_EMPTY", activity_id=activity_id)
        values["name"] = name
    if "start" in changes:
        values["start"] = require_date(changes["start"], "start")
    if "end" in changes:
        values["end"] = require_date(changes["end"], "end")
    if "progress" in changes:
        values["progress"] = require_progress(changes["progress"])
    if "cost" in changes:
        values["cost"] = require_cost(changes["cost"])
    if "resource" in changes:
        values["resource"] = str(changes["resource"] or "").strip()
    if "dependencies" in changes:
        values["dependencies"] = _validated_dependencies(activity_id, changes["dependencies"], by_id, snapshot.root_id)
    if "parent_id" in changes:
        values["parent_id"] = _validated_parent(snapshot, activity_id, changes["parent_id"])

    start = values.get("start", current.start)
    end = values.get("end", current.end)
    if end < start:
        raise ValidationError(
            f"Activity {activity_id} cannot end ({end}) before it starts ({start}).",
            code="INVALID_DATE_RANGE",
            activity_id=activity_id,
        )

    updated = replace(current, **values)
    activities = [updated if a.id == activity_id else a for a in snapshot.activities]
    logger.info("Activity %s edited: %s", activity_id, ", ".join(sorted(values)))
    return snapshot.with_activities(
        flatten_activities(activities, snapshot.root_id),
        cpm_fingerprint=None,
    )


def _validated_dependencies(activity_id: str, raw: Any, by_id: Dict, root_id: str) -> tuple[str, ...]:
    dependencies = parse_dependencies(raw)
    for dep_id in dependencies:
        if dep_id == activity_id:
            raise ValidationError(
                "An activity cannot depend on itself.",
                code="SELF_DEPENDENCY",
                activity_id=activity_id,
                reference=dep_id,
            )
        if dep_id == root_id or dep_id not in by_id:
            raise ValidationError(
                f"Activity {activity_id} depends on unknown activity {dep_id}.",
                code="DANGLING_DEPENDENCY",
                activity_id=activity_id,
                reference=dep_id,
            )
    return tuple(dependencies)


def _validated_parent(snapshot: ScheduleSnapshot, activity_id: str, raw: Any) -> str:
    if activity_id == snapshot.root_id:
        raise ValidationError("The root summary cannot be reparented.", code="ROOT_REPARENT", activity_id=activity_id)
    parent_id = str(raw or "").strip()
    by_id = snapshot.by_id()
    parent = by_id.get(parent_id)
    if parent is None:
        raise ValidationError(
            f"Parent {parent_id!r} does not exist.",
            code="PARENT_NOT_FOUND",
            activity_id=activity_id,
            reference=parent_id,
        )
    if not parent.is_group:
        raise ValidationError(
            f"Parent {parent_id} is not a group.",
            code="PARENT_NOT_GROUP",
            activity_id=activity_id,
            reference=parent_id,
        )
    ancestor = parent
    while ancestor is not None:
        if ancestor.id == activity_id:
            raise ValidationError(
                f"Moving {activity_id} under {parent_id} would create a loop.",
                code="PARENT_LOOP",
                activity_id=activity_id,
                reference=parent_id,
            )
        ancestor = by_id.get(ancestor.parent_id) if ancestor.parent_id else None
    return parent_id


__all__ = ["update_activity", "EDITABLE_FIELDS"]
