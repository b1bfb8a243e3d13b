from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import timedelta
from typing import Dict, List, Optional

from core.domain.activity import Activity
from core.domain.enums import CorrectiveAction
from core.domain.snapshot import ScheduleSnapshot
from core.exceptions import ValidationError
from core.services.corrective.models import (
    CRASH_LABEL,
    DEFAULT_POLICY,
    FAST_TRACK_LABEL,
    CompressionPolicy,
)
from core.services.rollup import rollup
from core.services.scheduling import compute_critical_path, is_schedule_current

logger = logging.getLogger(__name__)


def parse_action(value: CorrectiveAction | str) -> CorrectiveAction:
    if isinstance(value, CorrectiveAction):
        return value
    normalized = str(value or "").strip().lower().replace("_", "-")
    if normalized in ("fasttrack", "fast track"):
        normalized = CorrectiveAction.FAST_TRACK.value
    try:
        return CorrectiveAction(normalized)
    except ValueError:
        raise ValidationError(f"Unknown corrective action {value!r}.", code="UNKNOWN_ACTION") from None


def apply_action(
    snapshot: ScheduleSnapshot,
    action: CorrectiveAction | str,
    policy: Optional[CompressionPolicy] = None,
) -> ScheduleSnapshot:
    """
    Compress the schedule by crashing or fast-tracking critical tasks, then
    re-run rollup and the critical path so aggregates and float reflect it.
    """
    kind = parse_action(action)
    policy = policy or DEFAULT_POLICY

    analyzed = snapshot if is_schedule_current(snapshot) else compute_critical_path(snapshot)
    leaf_ids = {a.id for a in analyzed.leaves()}
    candidates = [a for a in analyzed.activities if a.id in leaf_ids and a.is_work_item and a.is_critical]
    if not candidates:
        logger.info("No critical tasks to %s; schedule unchanged", kind.value)
        return analyzed

    if kind == CorrectiveAction.CRASH:
        changed = _crash(candidates, policy)
    else:
        critical_ids = {a.id for a in analyzed.activities if a.is_critical}
        changed = _fast_track(candidates, critical_ids, policy)

    logger.info("Corrective action %s modified %d activities: %s", kind.value, len(changed), ", ".join(changed))
    modified = analyzed.with_activities(changed.get(a.id, a) for a in analyzed.activities)
    return compute_critical_path(rollup(modified))


def _crash(candidates: List[Activity], policy: CompressionPolicy) -> Dict[str, Activity]:
    ordered = sorted(candidates, key=lambda a: -a.duration_days)
    take = _ceil(len(ordered) * policy.crash_share)
    changed: Dict[str, Activity] = {}
    for activity in ordered[:take]:
        duration = activity.duration_days
        if duration <= 1:
            logger.debug("Activity %s is already at the minimum duration; not crashed", activity.id)
            continue
        new_duration = math.floor(round(duration * policy.crash_duration_factor, 9))
        changed[activity.id] = replace(
            activity,
            end=activity.start + timedelta(days=new_duration),
            cost=activity.cost * policy.crash_cost_factor,
            name=_annotate(activity.name, CRASH_LABEL),
            adjustments=activity.adjustments + (CorrectiveAction.CRASH.value,),
        )
    return changed


def _fast_track(
    candidates: List[Activity],
    critical_ids: set[str],
    policy: CompressionPolicy,
) -> Dict[str, Activity]:
    changed: Dict[str, Activity] = {}
    for activity in candidates:
        if not any(dep != activity.id and dep in critical_ids for dep in activity.dependencies):
            continue
        shift = timedelta(days=_ceil(activity.duration_days * policy.fast_track_overlap))
        changed[activity.id] = replace(
            activity,
            start=activity.start - shift,
            end=activity.end - shift,
            name=_annotate(activity.name, FAST_TRACK_LABEL),
            adjustments=activity.adjustments + (CorrectiveAction.FAST_TRACK.value,),
        )
    return changed


def _ceil(value: float) -> int:
    # 10 * 0.3 is 3.0000000000000004 in binary floating point
    return max(0, math.ceil(round(value, 9)))


def _annotate(name: str, label: str) -> str:
    suffix = f" ({label})"
    return name if name.endswith(suffix) else f"{name}{suffix}"


__all__ = ["apply_action", "parse_action"]
