from __future__ import annotations

from dataclasses import replace
from typing import Dict, List

from core.domain.activity import Activity, ScheduleInfo
from core.domain.snapshot import ScheduleSnapshot
from core.services.scheduling.graph import leaf_descendants


def build_schedule_result(
    snapshot: ScheduleSnapshot,
    durations: Dict[str, int],
    es: Dict[str, int],
    ef: Dict[str, int],
    ls: Dict[str, int],
    lf: Dict[str, int],
) -> List[Activity]:
    """
    Attach derived CPM values to every activity.

    Leaves get their own pass results; summary groups report the envelope of
    the leaves below them (earliest starts, latest finishes, smallest float).
    """
    infos: Dict[str, ScheduleInfo] = {}
    for node_id, duration in durations.items():
        total_float = ls[node_id] - es[node_id]
        infos[node_id] = ScheduleInfo(
            duration_days=duration,
            early_start=es[node_id],
            early_finish=ef[node_id],
            late_start=ls[node_id],
            late_finish=lf[node_id],
            total_float=total_float,
            is_critical=total_float <= 0,
        )

    children = snapshot.children_map()
    out: List[Activity] = []
    for activity in snapshot.activities:
        info = infos.get(activity.id)
        if info is None:
            below = [infos[i] for i in leaf_descendants(children, activity.id) if i in infos]
            info = _summarize(below) if below else None
        out.append(replace(activity, schedule=info))
    return out


def _summarize(infos: List[ScheduleInfo]) -> ScheduleInfo:
    early_start = min(i.early_start for i in infos)
    early_finish = max(i.early_finish for i in infos)
    return ScheduleInfo(
        duration_days=early_finish - early_start,
        early_start=early_start,
        early_finish=early_finish,
        late_start=min(i.late_start for i in infos),
        late_finish=max(i.late_finish for i in infos),
        total_float=min(i.total_float for i in infos),
        is_critical=any(i.is_critical for i in infos),
    )


__all__ = ["build_schedule_result"]
