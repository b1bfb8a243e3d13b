from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import ActivityKind


def span_days(start: date, end: date) -> int:
    """Schedulable duration: zero and negative spans are floored to one day."""
    return max(1, (end - start).days)


@dataclass(frozen=True)
class ScheduleInfo:
    duration_days: int
    early_start: int
    early_finish: int
    late_start: int
    late_finish: int
    total_float: int
    is_critical: bool


@dataclass(frozen=True)
class Activity:
    id: str
    kind: ActivityKind
    name: str
    start: date
    end: date
    progress: int = 0
    cost: float = 0.0
    resource: str = ""
    parent_id: Optional[str] = None
    dependencies: tuple[str, ...] = ()
    depth: int = 0
    adjustments: tuple[str, ...] = ()

    # derived, recomputed by the critical path engine
    schedule: Optional[ScheduleInfo] = None

    @property
    def is_group(self) -> bool:
        return self.kind == ActivityKind.GROUP

    @property
    def is_work_item(self) -> bool:
        return self.kind == ActivityKind.TASK

    @property
    def duration_days(self) -> int:
        return span_days(self.start, self.end)

    @property
    def is_critical(self) -> bool:
        return bool(self.schedule and self.schedule.is_critical)


__all__ = ["Activity", "ScheduleInfo", "span_days"]
