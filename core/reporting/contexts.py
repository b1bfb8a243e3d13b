from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from core.domain.curve import EvmStatus, TimeSeriesPoint
from core.domain.snapshot import ScheduleSnapshot
from core.services.reporting import CostBreakdownRow, CriticalPathSummary, ProgressStatusCounts


@dataclass
class ExcelReportContext:
    title: str
    currency: str
    generated_on: date
    snapshot: ScheduleSnapshot
    critical_path: CriticalPathSummary
    progress: ProgressStatusCounts
    cost_breakdown: List[CostBreakdownRow]
    evm: Optional[EvmStatus]
    evm_series: List[TimeSeriesPoint]
