from .corrective import CompressionPolicy, apply_action
from .evm import build_curve, curve_activities, summarize_curve
from .hierarchy import RootMeta, flatten, normalize, update_activity
from .pipeline import ScheduleCriteria, ScheduleEngine
from .reporting import cost_breakdown_by_category, critical_path_summary, progress_status_counts
from .rollup import rollup
from .scheduling import compute_critical_path, is_schedule_current

__all__ = [
    "ScheduleEngine",
    "ScheduleCriteria",
    "RootMeta",
    "normalize",
    "flatten",
    "update_activity",
    "rollup",
    "compute_critical_path",
    "is_schedule_current",
    "apply_action",
    "CompressionPolicy",
    "build_curve",
    "curve_activities",
    "summarize_curve",
    "critical_path_summary",
    "progress_status_counts",
    "cost_breakdown_by_category",
]
