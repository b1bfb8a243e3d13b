from __future__ import annotations

import heapq
from typing import Dict, List

from core.domain.activity import Activity
from core.domain.snapshot import ScheduleSnapshot
from core.exceptions import CycleDetectedError


def leaf_descendants(children: Dict[str, List[str]], node_id: str) -> List[str]:
    """Tree leaves below node_id (node_id itself when it has no children)."""
    out: List[str] = []
    stack = [node_id]
    seen: set[str] = set()
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        kids = children.get(current, [])
        if not kids:
            out.append(current)
            continue
        stack.extend(reversed(kids))
    return out


def build_precedence_network(
    snapshot: ScheduleSnapshot,
) -> tuple[list[str], dict[str, list[str]], dict[str, list[str]]]:
    """
    Precedence network over tree leaves.

    A dependency on a group stands for every leaf below it, and a dependency
    declared on a group applies to every leaf below it.

    Returns (topological order, predecessors by node, successors by node).
    Raises CycleDetectedError when the network is not a DAG.
    """
    by_id: Dict[str, Activity] = snapshot.by_id()
    children = snapshot.children_map()
    nodes = [a.id for a in snapshot.leaves()]
    position = {a.id: idx for idx, a in enumerate(snapshot.activities)}

    expanded: Dict[str, List[str]] = {}

    def expand(ref: str) -> List[str]:
        if ref not in expanded:
            expanded[ref] = leaf_descendants(children, ref) if ref in by_id else []
        return expanded[ref]

    preds: Dict[str, List[str]] = {}
    for node_id in nodes:
        declared: List[str] = list(by_id[node_id].dependencies)
        ancestor_id = by_id[node_id].parent_id
        hops = 0
        while ancestor_id is not None and ancestor_id in by_id and hops <= len(by_id):
            declared.extend(by_id[ancestor_id].dependencies)
            ancestor_id = by_id[ancestor_id].parent_id
            hops += 1

        resolved: List[str] = []
        for ref in declared:
            for pred_id in expand(ref):
                if pred_id not in resolved:
                    resolved.append(pred_id)
        preds[node_id] = resolved

    succs: Dict[str, List[str]] = {node_id: [] for node_id in nodes}
    indegree: Dict[str, int] = {node_id: 0 for node_id in nodes}
    for node_id, pred_ids in preds.items():
        for pred_id in pred_ids:
            succs[pred_id].append(node_id)
            indegree[node_id] += 1

    heap: list[tuple[int, str]] = [(position[n], n) for n, degree in indegree.items() if degree == 0]
    heapq.heapify(heap)
    topo_order: list[str] = []
    while heap:
        _pos, node_id = heapq.heappop(heap)
        topo_order.append(node_id)
        for succ_id in succs[node_id]:
            indegree[succ_id] -= 1
            if indegree[succ_id] == 0:
                heapq.heappush(heap, (position[succ_id], succ_id))

    if len(topo_order) != len(nodes):
        stalled = [n for n in nodes if indegree[n] > 0]
        raise CycleDetectedError(_find_cycle(stalled, preds))

    return topo_order, preds, succs


def _find_cycle(stalled: List[str], preds: Dict[str, List[str]]) -> List[str]:
    # every stalled node still has a stalled predecessor, so walking backwards must close a loop
    remaining = set(stalled)
    path: List[str] = []
    index: Dict[str, int] = {}
    current = stalled[0]
    while current not in index:
        index[current] = len(path)
        path.append(current)
        current = next(p for p in preds[current] if p in remaining)
    cycle = path[index[current]:]
    cycle.reverse()
    return cycle


__all__ = ["build_precedence_network", "leaf_descendants"]
