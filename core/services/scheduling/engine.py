# core/services/scheduling/engine.py
from __future__ import annotations

import hashlib
import logging
from datetime import date, timedelta
from typing import Optional

from core.domain.snapshot import ScheduleSnapshot
from core.services.scheduling.graph import build_precedence_network
from core.services.scheduling.models import CriticalPathSummary
from core.services.scheduling.passes import resolve_horizon, run_backward_pass, run_forward_pass
from core.services.scheduling.results import build_schedule_result

logger = logging.getLogger(__name__)


def compute_critical_path(snapshot: ScheduleSnapshot) -> ScheduleSnapshot:
    """
    CPM over the precedence network of tree leaves:
    - duration = max(1, end - start) in days
    - forward pass: ES = max(pred EF, 0), EF = ES + duration
    - backward pass: LF = min(succ LS, horizon), LS = LF - duration
    - float = LS - ES, critical when float <= 0

    Offsets are whole days from the project anchor (day 0). A forced project
    finish earlier than the computed one tightens the horizon and can make
    float negative; a later one leaves the horizon as computed.
    """
    if not snapshot.activities:
        return snapshot

    topo_order, preds, succs = build_precedence_network(snapshot)
    by_id = snapshot.by_id()
    durations = {node_id: by_id[node_id].duration_days for node_id in topo_order}

    es, ef, early_horizon = run_forward_pass(topo_order, preds, durations)
    horizon = resolve_horizon(early_horizon, _forced_horizon(snapshot))
    ls, lf = run_backward_pass(topo_order, succs, durations, horizon)

    activities = build_schedule_result(snapshot, durations, es, ef, ls, lf)
    critical = sum(1 for node_id in topo_order if ls[node_id] - es[node_id] <= 0)
    logger.info(
        "Critical path computed: %d network activities, horizon %d days, %d critical",
        len(topo_order),
        horizon,
        critical,
    )
    return snapshot.with_activities(activities, cpm_fingerprint=schedule_fingerprint(snapshot))


def project_anchor(snapshot: ScheduleSnapshot) -> date:
    if snapshot.constraints.start is not None:
        return snapshot.constraints.start
    leaves = snapshot.leaves()
    return min(a.start for a in leaves) if leaves else snapshot.root.start


def _forced_horizon(snapshot: ScheduleSnapshot) -> Optional[int]:
    finish = snapshot.constraints.finish
    if finish is None:
        return None
    return (finish - project_anchor(snapshot)).days


def schedule_fingerprint(snapshot: ScheduleSnapshot) -> str:
    """Digest of everything the critical path depends on."""
    digest = hashlib.sha256()
    digest.update(repr((snapshot.root_id, snapshot.constraints.start, snapshot.constraints.finish)).encode("utf-8"))
    for a in snapshot.activities:
        digest.update(
            repr((a.id, a.parent_id, a.kind.value, a.start, a.end, a.dependencies)).encode("utf-8")
        )
    return digest.hexdigest()[:16]


def is_schedule_current(snapshot: ScheduleSnapshot) -> bool:
    return snapshot.cpm_fingerprint is not None and snapshot.cpm_fingerprint == schedule_fingerprint(snapshot)


def critical_path_summary(snapshot: ScheduleSnapshot) -> CriticalPathSummary:
    if not is_schedule_current(snapshot):
        snapshot = compute_critical_path(snapshot)

    position = {a.id: idx for idx, a in enumerate(snapshot.activities)}
    leaves = [a for a in snapshot.leaves() if a.schedule is not None]
    critical = sorted(
        (a for a in leaves if a.schedule.is_critical),
        key=lambda a: (a.schedule.early_start, position[a.id]),
    )
    horizon = max((a.schedule.late_finish for a in leaves), default=0)
    anchor = project_anchor(snapshot)
    floats = [a.schedule.total_float for a in leaves]

    return CriticalPathSummary(
        project_horizon_days=horizon,
        project_start=anchor,
        project_finish=anchor + timedelta(days=horizon),
        critical_ids=tuple(a.id for a in critical),
        critical_count=len(critical),
        critical_cost=float(sum(a.cost for a in critical)),
        negative_float_ids=tuple(a.id for a in leaves if a.schedule.total_float < 0),
        worst_float=min(floats) if floats else None,
    )


__all__ = [
    "compute_critical_path",
    "critical_path_summary",
    "is_schedule_current",
    "project_anchor",
    "schedule_fingerprint",
]
