from core.services.reporting.cost_breakdown import cost_breakdown_by_category, resource_category
from core.services.reporting.models import CostBreakdownRow, ProgressStatusCounts
from core.services.reporting.progress import progress_status_counts
from core.services.scheduling import CriticalPathSummary, critical_path_summary

__all__ = [
    "CostBreakdownRow",
    "ProgressStatusCounts",
    "CriticalPathSummary",
    "cost_breakdown_by_category",
    "critical_path_summary",
    "progress_status_counts",
    "resource_category",
]
