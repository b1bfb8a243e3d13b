from __future__ import annotations

from bisect import bisect_right
from datetime import date
from typing import Mapping, Optional, Protocol

from core.exceptions import ValidationError
from core.services.evm.policy import assumed_cost_efficiency


class ActualCostModel(Protocol):
    def estimate(self, day: date, earned_value: float) -> float:
        ...


class AssumedEfficiencyCostModel:
    """
    Actual cost is not measured, it is estimated: AC = EV / assumed CPI.

    With the default efficiency of 1.0 the cost line coincides with earned
    value. Hosts that know a project runs hot can declare e.g. 0.9.
    """

    def __init__(self, assumed_cpi: Optional[float] = None):
        if assumed_cpi is None:
            assumed_cpi = assumed_cost_efficiency()
        if assumed_cpi <= 0:
            raise ValidationError("Assumed cost efficiency must be positive.", code="INVALID_ASSUMED_CPI")
        self.assumed_cpi = float(assumed_cpi)

    def estimate(self, day: date, earned_value: float) -> float:
        return earned_value / self.assumed_cpi


class ReportedActualsCostModel:
    """Cumulative actual cost reported by the host, carried forward between reports."""

    def __init__(self, cumulative_actuals: Mapping[date, float]):
        for day, amount in cumulative_actuals.items():
            if amount < 0:
                raise ValidationError(
                    f"Reported actual cost on {day.isoformat()} is negative.",
                    code="INVALID_ACTUAL_COST",
                )
        self._days = sorted(cumulative_actuals)
        self._amounts = [float(cumulative_actuals[d]) for d in self._days]

    def estimate(self, day: date, earned_value: float) -> float:
        idx = bisect_right(self._days, day)
        return self._amounts[idx - 1] if idx else 0.0


__all__ = ["ActualCostModel", "AssumedEfficiencyCostModel", "ReportedActualsCostModel"]
