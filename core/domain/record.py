from __future__ import annotations

from dataclasses import dataclass

from core.domain.identifiers import generate_id
from core.domain.snapshot import ScheduleSnapshot


@dataclass
class ScheduleRecord:
    """A stored schedule: the snapshot plus the identity and version it is saved under."""
    name: str
    snapshot: ScheduleSnapshot
    id: str = ""
    version: int = 1

    def __post_init__(self):
        if not self.id:
            self.id = generate_id()


__all__ = ["ScheduleRecord"]
