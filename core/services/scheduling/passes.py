from __future__ import annotations

from typing import Dict, List, Optional


def run_forward_pass(
    topo_order: List[str],
    preds: Dict[str, List[str]],
    durations: Dict[str, int],
) -> tuple[Dict[str, int], Dict[str, int], int]:
    es: Dict[str, int] = {}
    ef: Dict[str, int] = {}

    for node_id in topo_order:
        est = max((ef[p] for p in preds.get(node_id, [])), default=0)
        es[node_id] = est
        ef[node_id] = est + durations[node_id]

    return es, ef, max(ef.values(), default=0)


def run_backward_pass(
    topo_order: List[str],
    succs: Dict[str, List[str]],
    durations: Dict[str, int],
    project_horizon: int,
) -> tuple[Dict[str, int], Dict[str, int]]:
    ls: Dict[str, int] = {}
    lf: Dict[str, int] = {}

    for node_id in reversed(topo_order):
        lft = min((ls[s] for s in succs.get(node_id, [])), default=project_horizon)
        lf[node_id] = lft
        ls[node_id] = lft - durations[node_id]

    return ls, lf


def resolve_horizon(early_finish_horizon: int, forced_horizon: Optional[int]) -> int:
    """A forced project finish can only tighten the computed horizon, never relax it."""
    if forced_horizon is None:
        return early_finish_horizon
    return min(early_finish_horizon, forced_horizon)


__all__ = ["run_forward_pass", "run_backward_pass", "resolve_horizon"]
