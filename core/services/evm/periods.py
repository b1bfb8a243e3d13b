from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List

from core.domain.curve import TimeSeriesPoint
from core.domain.enums import ReportingInterval


def period_label(day: date, interval: ReportingInterval) -> str:
    if interval == ReportingInterval.WEEK:
        iso_year, iso_week, _ = day.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    if interval == ReportingInterval.MONTH:
        return f"{day.year}-{day.month:02d}"
    if interval == ReportingInterval.QUARTER:
        return f"{day.year}-Q{(day.month - 1) // 3 + 1}"
    return day.isoformat()


def aggregate_points(points: Iterable[TimeSeriesPoint], interval: ReportingInterval) -> List[TimeSeriesPoint]:
    """
    Bucket daily points by calendar period, keeping the last point of each.

    The series are cumulative, so the end-of-period value is the period value;
    averaging would understate it.
    """
    buckets: Dict[str, TimeSeriesPoint] = {}
    for point in points:
        label = period_label(point.period_end, interval)
        buckets[label] = replace(point, period_label=label)
    return list(buckets.values())


__all__ = ["period_label", "aggregate_points"]
