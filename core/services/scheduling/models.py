from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class CriticalPathSummary:
    project_horizon_days: int
    project_start: date
    project_finish: date
    critical_ids: tuple[str, ...]
    critical_count: int
    critical_cost: float
    negative_float_ids: tuple[str, ...] = ()
    worst_float: Optional[int] = None
