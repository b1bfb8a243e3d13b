from .engine import (
    compute_critical_path,
    critical_path_summary,
    is_schedule_current,
    project_anchor,
    schedule_fingerprint,
)
from .graph import build_precedence_network
from .models import CriticalPathSummary

__all__ = [
    "compute_critical_path",
    "critical_path_summary",
    "is_schedule_current",
    "project_anchor",
    "schedule_fingerprint",
    "build_precedence_network",
    "CriticalPathSummary",
]
