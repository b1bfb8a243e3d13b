from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side, unlike round()'s banker's rounding."""
    return int(math.floor(value + 0.5))


__all__ = ["round_half_up"]
