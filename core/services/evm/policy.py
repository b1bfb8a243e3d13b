from __future__ import annotations

import logging
import math
import os
from typing import Optional

from core.domain.enums import ReportingInterval
from core.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ASSUMED_CPI = 1.0
DEFAULT_INTERVAL = ReportingInterval.DAY


def assumed_cost_efficiency() -> float:
    raw = (os.getenv("PM_EVM_ASSUMED_CPI", "") or "").strip()
    if not raw:
        return DEFAULT_ASSUMED_CPI
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring PM_EVM_ASSUMED_CPI=%r: not a number", raw)
        return DEFAULT_ASSUMED_CPI
    if not math.isfinite(value) or value <= 0:
        logger.warning("Ignoring PM_EVM_ASSUMED_CPI=%r: must be a positive number", raw)
        return DEFAULT_ASSUMED_CPI
    return value


def default_reporting_interval() -> ReportingInterval:
    raw = (os.getenv("PM_REPORTING_INTERVAL", "") or "").strip().lower()
    if not raw:
        return DEFAULT_INTERVAL
    try:
        return ReportingInterval(raw)
    except ValueError:
        logger.warning("Ignoring PM_REPORTING_INTERVAL=%r: unknown interval", raw)
        return DEFAULT_INTERVAL


def parse_interval(value: Optional[ReportingInterval | str]) -> ReportingInterval:
    if value is None:
        return default_reporting_interval()
    if isinstance(value, ReportingInterval):
        return value
    try:
        return ReportingInterval(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown reporting interval {value!r}.", code="UNKNOWN_INTERVAL") from None


__all__ = [
    "DEFAULT_ASSUMED_CPI",
    "DEFAULT_INTERVAL",
    "assumed_cost_efficiency",
    "default_reporting_interval",
    "parse_interval",
]
