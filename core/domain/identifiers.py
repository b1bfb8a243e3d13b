from __future__ import annotations

from uuid import uuid4

ROOT_ID = "ROOT-SUMMARY"


def generate_id() -> str:
    return str(uuid4())


def positional_id(index: int) -> str:
    """Stable fallback id for an input row that arrived without one."""
    return f"ACT-{index + 1}"


def deduplicated_id(base: str, occurrence: int) -> str:
    return f"{base}~{occurrence}"


__all__ = ["ROOT_ID", "generate_id", "positional_id", "deduplicated_id"]
