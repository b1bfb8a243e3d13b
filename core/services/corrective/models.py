from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CompressionPolicy:
    # crash: shorten the longest critical tasks, paying a premium
    crash_share: float = 0.3
    crash_duration_factor: float = 0.75
    crash_cost_factor: float = 1.2
    # fast-track: overlap a critical task with its critical predecessor
    fast_track_overlap: float = 0.2


DEFAULT_POLICY = CompressionPolicy()

CRASH_LABEL = "Crashed"
FAST_TRACK_LABEL = "Fast-Tracked"

__all__ = ["CompressionPolicy", "DEFAULT_POLICY", "CRASH_LABEL", "FAST_TRACK_LABEL"]
