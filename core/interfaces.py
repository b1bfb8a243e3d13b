from __future__ import annotations

from typing import List, Optional, Protocol

from core.domain.record import ScheduleRecord
from core.domain.snapshot import ScheduleSnapshot


class ScheduleRepository(Protocol):
    def add(self, record: ScheduleRecord) -> None: ...
    def get(self, schedule_id: str) -> Optional[ScheduleRecord]: ...
    def list_all(self) -> List[ScheduleRecord]: ...
    def save(self, schedule_id: str, snapshot: ScheduleSnapshot, expected_version: int) -> int: ...
    def delete(self, schedule_id: str) -> None: ...


__all__ = ["ScheduleRepository"]
