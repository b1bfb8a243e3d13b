from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.identifiers import ROOT_ID


@dataclass(frozen=True)
class RootMeta:
    """Defaults used when the incoming activity list has no summary root."""
    root_id: str = ROOT_ID
    title: Optional[str] = None
    start: Optional[date] = None
    resource: str = "Project Management"

    @property
    def root_name(self) -> str:
        return f"Project Summary: {self.title or 'Overall Project'}"


__all__ = ["RootMeta"]
