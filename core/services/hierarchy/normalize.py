from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.domain.activity import Activity
from core.domain.enums import ActivityKind
from core.domain.identifiers import deduplicated_id, positional_id
from core.domain.snapshot import ScheduleConstraints, ScheduleSnapshot
from core.exceptions import ValidationError
from core.services.hierarchy.flatten import flatten_activities
from core.services.hierarchy.models import RootMeta
from core.services.hierarchy.parsing import (
    parse_cost,
    parse_date,
    parse_dependencies,
    parse_kind,
    parse_parent,
    parse_progress,
    pick,
)

logger = logging.getLogger(__name__)


@dataclass
class _Draft:
    id: str
    kind: ActivityKind
    name: str
    start: Optional[date]
    end: Optional[date]
    progress: int
    cost: float
    resource: str
    parent_id: Optional[str]
    dependencies: List[str] = field(default_factory=list)

    def freeze(self) -> Activity:
        if self.start is None or self.end is None:
            raise ValidationError(f"Activity {self.id} has no dates.", code="INVALID_DATE", activity_id=self.id)
        return Activity(
            id=self.id,
            kind=self.kind,
            name=self.name,
            start=self.start,
            end=self.end,
            progress=self.progress,
            cost=self.cost,
            resource=self.resource,
            parent_id=self.parent_id,
            dependencies=tuple(self.dependencies),
        )


def normalize(
    raw_activities: Optional[Iterable[Any]],
    default_root_meta: Optional[RootMeta] = None,
    *,
    constraints: Optional[ScheduleConstraints] = None,
    drop_dangling_dependencies: bool = False,
) -> ScheduleSnapshot:
    """
    Sanitize a loosely structured activity list into a valid snapshot.

    Repairs (each logged):
    - ids stringified, missing ids get a positional id, duplicates are renamed
    - a summary root group is synthesized when absent
    - orphans, placeholder parents and looping parent chains go under the root
    - non-group activities that own children become groups
    - dates, progress and cost are coerced; end before start is clamped

    Dependencies on ids that do not exist are not repairable: they raise
    ValidationError unless drop_dangling_dependencies is set.
    """
    meta = default_root_meta or RootMeta()
    drafts = _read_drafts(raw_activities or [])
    _ensure_root(drafts, meta)
    _fill_dates(drafts, meta)

    by_id: Dict[str, _Draft] = {d.id: d for d in drafts}
    _repair_parents(drafts, by_id, meta.root_id)
    _promote_parents_to_groups(drafts, by_id, meta.root_id)
    _check_dependencies(drafts, by_id, meta.root_id, drop_dangling_dependencies)

    activities = flatten_activities([d.freeze() for d in drafts], meta.root_id)
    logger.debug("Normalized %d activities under root %s", len(activities), meta.root_id)
    return ScheduleSnapshot(
        activities=tuple(activities),
        root_id=meta.root_id,
        constraints=constraints or ScheduleConstraints(),
    )


def _read_drafts(raw_activities: Iterable[Any]) -> List[_Draft]:
    rows = list(raw_activities)
    # a renamed duplicate must not take an id that a later row carries
    reserved = {_raw_id(row) for row in rows if isinstance(row, Mapping)}
    drafts: List[_Draft] = []
    taken: set[str] = set()
    occurrences: Dict[str, int] = {}
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            logger.warning("Skipping activity row %d: expected a mapping, got %s", index, type(row).__name__)
            continue

        activity_id = _raw_id(row)
        if not activity_id:
            activity_id = positional_id(index)
            logger.warning("Activity row %d has no id; assigned %s", index, activity_id)
        if activity_id in taken:
            occurrence = occurrences.get(activity_id, 1) + 1
            renamed = deduplicated_id(activity_id, occurrence)
            while renamed in taken or renamed in reserved:
                occurrence += 1
                renamed = deduplicated_id(activity_id, occurrence)
            occurrences[activity_id] = occurrence
            logger.warning("Duplicate activity id %s renamed to %s", activity_id, renamed)
            activity_id = renamed
        taken.add(activity_id)

        name = str(pick(row, "name") or "").strip() or f"Activity {activity_id}"
        drafts.append(
            _Draft(
                id=activity_id,
                kind=parse_kind(pick(row, "kind")),
                name=name,
                start=parse_date(pick(row, "start")),
                end=parse_date(pick(row, "end")),
                progress=parse_progress(pick(row, "progress")),
                cost=parse_cost(pick(row, "cost")),
                resource=str(pick(row, "resource") or "").strip(),
                parent_id=parse_parent(pick(row, "parent")),
                dependencies=parse_dependencies(pick(row, "dependencies")),
            )
        )
    return drafts


def _raw_id(row: Mapping) -> str:
    raw_id = pick(row, "id")
    return str(raw_id).strip() if raw_id is not None else ""


def _ensure_root(drafts: List[_Draft], meta: RootMeta) -> None:
    root = next((d for d in drafts if d.id == meta.root_id), None)
    if root is not None:
        if root.kind != ActivityKind.GROUP:
            logger.warning("Root %s was declared as %s; treating it as a group", root.id, root.kind.value)
            root.kind = ActivityKind.GROUP
        if root.parent_id is not None:
            logger.warning("Root %s cannot have a parent; dropped %s", root.id, root.parent_id)
            root.parent_id = None
        if root.dependencies:
            logger.warning("Root %s cannot have dependencies; dropped %s", root.id, root.dependencies)
            root.dependencies = []
        drafts.remove(root)
        drafts.insert(0, root)
        return

    starts = [d.start for d in drafts if d.start is not None]
    ends = [d.end for d in drafts if d.end is not None]
    root_start = min(starts) if starts else (meta.start or date.today())
    root_end = max(ends) if ends else root_start
    drafts.insert(
        0,
        _Draft(
            id=meta.root_id,
            kind=ActivityKind.GROUP,
            name=meta.root_name,
            start=root_start,
            end=max(root_end, root_start),
            progress=0,
            cost=0.0,
            resource=meta.resource,
            parent_id=None,
        ),
    )
    logger.info("Synthesized root %s spanning %s..%s", meta.root_id, root_start, root_end)


def _fill_dates(drafts: List[_Draft], meta: RootMeta) -> None:
    root = drafts[0]
    fallback = meta.start or root.start or date.today()
    for draft in drafts:
        if draft.start is None and draft.end is None:
            logger.warning("Activity %s has no dates; defaulting to %s", draft.id, fallback)
            draft.start = draft.end = fallback
        elif draft.start is None:
            draft.start = draft.end
        elif draft.end is None:
            draft.end = draft.start
        if draft.end < draft.start:
            logger.warning("Activity %s ends (%s) before it starts (%s); clamped", draft.id, draft.end, draft.start)
            draft.end = draft.start


def _repair_parents(drafts: List[_Draft], by_id: Dict[str, _Draft], root_id: str) -> None:
    for draft in drafts:
        if draft.id == root_id:
            continue
        parent = draft.parent_id
        if parent is None or parent == draft.id or parent not in by_id:
            if parent is not None:
                logger.warning("Activity %s references invalid parent %s; reparented to root", draft.id, parent)
            draft.parent_id = root_id

    # walk each ancestor chain once; a chain that loops is cut where it closes
    verified = {root_id}
    for draft in drafts:
        path: List[str] = []
        on_path: set[str] = set()
        current = draft.id
        while current not in verified:
            if current in on_path:
                logger.warning("Parent chain loops at %s; reparented to root", current)
                by_id[current].parent_id = root_id
                break
            on_path.add(current)
            path.append(current)
            current = by_id[current].parent_id or root_id
        verified.update(path)


def _promote_parents_to_groups(drafts: List[_Draft], by_id: Dict[str, _Draft], root_id: str) -> None:
    parents = {d.parent_id for d in drafts if d.id != root_id}
    for parent_id in parents:
        parent = by_id.get(parent_id) if parent_id else None
        if parent is not None and parent.kind != ActivityKind.GROUP:
            logger.warning("Activity %s owns children; promoted to group", parent.id)
            parent.kind = ActivityKind.GROUP


def _check_dependencies(
    drafts: List[_Draft],
    by_id: Dict[str, _Draft],
    root_id: str,
    drop_dangling: bool,
) -> None:
    dangling: List[tuple[str, str]] = []
    for draft in drafts:
        kept: List[str] = []
        for dep_id in draft.dependencies:
            if dep_id == draft.id:
                logger.warning("Activity %s depends on itself; edge dropped", draft.id)
                continue
            if dep_id == root_id:
                logger.warning("Activity %s depends on the root summary; edge dropped", draft.id)
                continue
            if dep_id not in by_id:
                dangling.append((draft.id, dep_id))
                if drop_dangling:
                    logger.warning("Activity %s depends on unknown %s; edge dropped", draft.id, dep_id)
                    continue
            kept.append(dep_id)
        draft.dependencies = kept

    if dangling and not drop_dangling:
        listed = ", ".join(f"{a} -> {ref}" for a, ref in dangling)
        activity_id, reference = dangling[0]
        raise ValidationError(
            f"Dependencies reference unknown activities: {listed}",
            code="DANGLING_DEPENDENCY",
            activity_id=activity_id,
            reference=reference,
        )


__all__ = ["normalize"]
