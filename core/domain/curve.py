from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class TimeSeriesPoint:
    period_label: str
    period_end: date
    planned_percent: float
    actual_percent: Optional[float]
    planned_value: float
    earned_value: Optional[float]
    actual_cost: Optional[float]
    schedule_performance_index: float
    cost_performance_index: float


@dataclass(frozen=True)
class EvmStatus:
    as_of: Optional[date]
    BAC: float
    PV: float
    EV: Optional[float]
    AC: Optional[float]
    SPI: float
    CPI: float
    EAC: Optional[float]
    VAC: Optional[float]
    status_text: str


__all__ = ["TimeSeriesPoint", "EvmStatus"]
