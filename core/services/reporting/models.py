from __future__ import annotations

from dataclasses import dataclass

from core.domain.enums import ResourceCategory


@dataclass
class ProgressStatusCounts:
    not_started: int
    in_progress: int
    done: int

    @property
    def total(self) -> int:
        return self.not_started + self.in_progress + self.done


@dataclass
class CostBreakdownRow:
    category: ResourceCategory
    activity_count: int
    cost: float
    share: float


__all__ = ["ProgressStatusCounts", "CostBreakdownRow"]
