from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from core.domain.enums import ActivityKind
from core.exceptions import ValidationError
from core.services.common.numbers import round_half_up

_GROUP_KINDS = {"project", "group", "phase", "summary", "wbs"}
_MILESTONE_KINDS = {"milestone"}
_PARENT_PLACEHOLDERS = {"", "root", "unassigned", "none", "null"}

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "name": ("name", "title"),
    "kind": ("type", "kind"),
    "start": ("start", "start_date", "startDate"),
    "end": ("end", "end_date", "endDate", "finish"),
    "progress": ("progress", "progress_percent", "progressPercent", "percent_complete"),
    "cost": ("cost",),
    "resource": ("resource", "resource_label", "resourceLabel"),
    "parent": ("project", "parent", "parent_id", "parentId"),
    "dependencies": ("dependencies", "depends_on", "predecessors"),
}


def pick(row: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in row and row[key] is not None:
            return row[key]
    return None


def parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def parse_kind(value: Any) -> ActivityKind:
    if isinstance(value, ActivityKind):
        return value
    normalized = str(value or "").strip().lower()
    if normalized in _GROUP_KINDS:
        return ActivityKind.GROUP
    if normalized in _MILESTONE_KINDS:
        return ActivityKind.MILESTONE
    return ActivityKind.TASK


def parse_progress(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number):
        return 0
    return round_half_up(max(0.0, min(100.0, number)))


def parse_cost(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def parse_parent(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in _PARENT_PLACEHOLDERS:
        return None
    return text


def parse_dependencies(value: Any) -> list[str]:
    if value in (None, ""):
        return []
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = value
    else:
        items = [value]
    out: list[str] = []
    for item in items:
        text = str(item).strip() if item is not None else ""
        if text and text not in out:
            out.append(text)
    return out


# ---------- strict variants used for user edits ----------

def require_date(value: Any, field: str) -> date:
    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD).", code="INVALID_DATE")
    return parsed


def require_progress(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError("progress must be a number.", code="INVALID_PROGRESS") from None
    if number < 0 or number > 100:
        raise ValidationError("progress must be between 0 and 100.", code="INVALID_PROGRESS")
    return round_half_up(number)


def require_cost(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError("cost must be a number.", code="INVALID_COST") from None
    if math.isnan(number) or number < 0:
        raise ValidationError("cost cannot be negative.", code="INVALID_COST")
    return number


__all__ = [
    "FIELD_ALIASES",
    "pick",
    "parse_date",
    "parse_kind",
    "parse_progress",
    "parse_cost",
    "parse_parent",
    "parse_dependencies",
    "require_date",
    "require_progress",
    "require_cost",
]
