from __future__ import annotations

from enum import Enum


class ActivityKind(str, Enum):
    GROUP = "GROUP"
    TASK = "TASK"
    MILESTONE = "MILESTONE"


class CorrectiveAction(str, Enum):
    CRASH = "crash"
    FAST_TRACK = "fast-track"


class ReportingInterval(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


class ResourceCategory(str, Enum):
    LABOR = "LABOR"
    MATERIAL = "MATERIAL"
    EQUIPMENT = "EQUIPMENT"
    OTHER = "OTHER"


__all__ = ["ActivityKind", "CorrectiveAction", "ReportingInterval", "ResourceCategory"]
