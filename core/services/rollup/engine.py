from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List

from core.domain.activity import Activity
from core.domain.snapshot import ScheduleSnapshot
from core.exceptions import ValidationError
from core.services.common.numbers import round_half_up

logger = logging.getLogger(__name__)


def rollup(snapshot: ScheduleSnapshot) -> ScheduleSnapshot:
    """
    Bottom-up aggregation of group cost, progress and date bounds.

    - cost: sum of children (0 for a group without children)
    - progress: cost-weighted mean of children, simple mean when nothing is costed
    - start/end: min/max of children
    Forced project bounds are applied to the root afterwards. Re-running on a
    rolled-up snapshot returns an equal snapshot.
    """
    children = snapshot.children_map()
    rolled: Dict[str, Activity] = snapshot.by_id()
    visited: set[str] = set()
    done: set[str] = set()

    for seed in snapshot.activities:
        if seed.id in visited:
            continue
        stack: list[tuple[str, bool]] = [(seed.id, False)]
        while stack:
            node_id, expanded = stack.pop()
            if expanded:
                child_ids = [c for c in children.get(node_id, []) if c in done]
                rolled[node_id] = _aggregate(rolled[node_id], [rolled[c] for c in child_ids])
                done.add(node_id)
                continue
            if node_id in visited:
                logger.warning("Ownership loop reached %s again during rollup; skipped", node_id)
                continue
            visited.add(node_id)
            stack.append((node_id, True))
            for child_id in reversed(children.get(node_id, [])):
                if child_id not in visited and child_id in rolled:
                    stack.append((child_id, False))

    rolled[snapshot.root_id] = _apply_constraints(snapshot, rolled[snapshot.root_id])
    logger.debug("Rolled up %d groups", sum(1 for a in rolled.values() if a.is_group))
    return snapshot.with_activities(rolled[a.id] for a in snapshot.activities)


def _aggregate(node: Activity, kids: List[Activity]) -> Activity:
    if not node.is_group:
        return node
    if not kids:
        # an empty group owns no work; authored or stale values are dropped
        return replace(node, cost=0.0, progress=0)

    total_cost = sum(k.cost for k in kids)
    if total_cost > 0:
        progress = round_half_up(sum(k.progress * k.cost for k in kids) / total_cost)
    else:
        progress = round_half_up(sum(k.progress for k in kids) / len(kids))

    return replace(
        node,
        cost=total_cost,
        progress=progress,
        start=min(k.start for k in kids),
        end=max(k.end for k in kids),
    )


def _apply_constraints(snapshot: ScheduleSnapshot, root: Activity) -> Activity:
    forced = snapshot.constraints
    if forced.start is None and forced.finish is None:
        return root
    start = forced.start or root.start
    end = forced.finish or root.end
    if end < start:
        raise ValidationError(
            f"Forced project finish {end} precedes project start {start}.",
            code="CONSTRAINT_CONFLICT",
            activity_id=root.id,
        )
    return replace(root, start=start, end=end)


__all__ = ["rollup"]
