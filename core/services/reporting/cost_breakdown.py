from __future__ import annotations

import re
from typing import Dict, List

from core.domain.enums import ResourceCategory
from core.domain.snapshot import ScheduleSnapshot
from core.services.reporting.models import CostBreakdownRow

_CATEGORY_SUFFIX = re.compile(r"\(([^()]*)\)\s*$")

_CATEGORY_ALIASES = {
    "labor": ResourceCategory.LABOR,
    "labour": ResourceCategory.LABOR,
    "material": ResourceCategory.MATERIAL,
    "materials": ResourceCategory.MATERIAL,
    "equipment": ResourceCategory.EQUIPMENT,
}


def resource_category(label: str) -> ResourceCategory:
    """Category from a "Site Engineer (Labor)" style resource label."""
    match = _CATEGORY_SUFFIX.search(label or "")
    if not match:
        return ResourceCategory.OTHER
    return _CATEGORY_ALIASES.get(match.group(1).strip().lower(), ResourceCategory.OTHER)


def cost_breakdown_by_category(snapshot: ScheduleSnapshot) -> List[CostBreakdownRow]:
    """
    Leaf cost grouped by resource category.

    Group costs are sums of their children and are left out to avoid
    counting the same money twice.
    """
    totals: Dict[ResourceCategory, float] = {}
    counts: Dict[ResourceCategory, int] = {}
    for activity in snapshot.leaves():
        category = resource_category(activity.resource)
        totals[category] = totals.get(category, 0.0) + activity.cost
        counts[category] = counts.get(category, 0) + 1

    grand_total = sum(totals.values())
    rows: List[CostBreakdownRow] = []
    for category in ResourceCategory:
        if category not in counts:
            continue
        cost = totals[category]
        rows.append(
            CostBreakdownRow(
                category=category,
                activity_count=counts[category],
                cost=cost,
                share=cost / grand_total if grand_total > 0 else 0.0,
            )
        )
    return rows


__all__ = ["cost_breakdown_by_category", "resource_category"]
