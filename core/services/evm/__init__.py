from .cost_model import ActualCostModel, AssumedEfficiencyCostModel, ReportedActualsCostModel
from .curve import build_curve, curve_activities
from .periods import aggregate_points, period_label
from .policy import assumed_cost_efficiency, default_reporting_interval, parse_interval
from .status import interpret_status, summarize_curve

__all__ = [
    "ActualCostModel",
    "AssumedEfficiencyCostModel",
    "ReportedActualsCostModel",
    "build_curve",
    "curve_activities",
    "aggregate_points",
    "period_label",
    "assumed_cost_efficiency",
    "default_reporting_interval",
    "parse_interval",
    "interpret_status",
    "summarize_curve",
]
