from core.domain.activity import Activity, ScheduleInfo, span_days
from core.domain.curve import EvmStatus, TimeSeriesPoint
from core.domain.enums import ActivityKind, CorrectiveAction, ReportingInterval, ResourceCategory
from core.domain.identifiers import ROOT_ID, generate_id
from core.domain.record import ScheduleRecord
from core.domain.snapshot import ScheduleConstraints, ScheduleSnapshot

__all__ = [
    "ROOT_ID",
    "generate_id",
    "ActivityKind",
    "CorrectiveAction",
    "ReportingInterval",
    "ResourceCategory",
    "Activity",
    "ScheduleInfo",
    "span_days",
    "ScheduleConstraints",
    "ScheduleSnapshot",
    "ScheduleRecord",
    "TimeSeriesPoint",
    "EvmStatus",
]
