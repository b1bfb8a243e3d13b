from __future__ import annotations

from core.domain.snapshot import ScheduleSnapshot
from core.services.reporting.models import ProgressStatusCounts


def progress_status_counts(snapshot: ScheduleSnapshot) -> ProgressStatusCounts:
    """Counts over tasks and milestones; groups only mirror their children."""
    counts = ProgressStatusCounts(not_started=0, in_progress=0, done=0)
    for activity in snapshot.activities:
        if activity.is_group:
            continue
        if activity.progress >= 100:
            counts.done += 1
        elif activity.progress > 0:
            counts.in_progress += 1
        else:
            counts.not_started += 1
    return counts


__all__ = ["progress_status_counts"]
