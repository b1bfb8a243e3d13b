from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from core.domain.curve import EvmStatus, TimeSeriesPoint


def summarize_curve(points: List[TimeSeriesPoint], total_budget: float) -> EvmStatus:
    """Status as of the latest point that carries actuals."""
    budget = max(0.0, float(total_budget or 0.0))
    latest: Optional[TimeSeriesPoint] = None
    for point in points:
        if point.actual_percent is not None:
            latest = point

    if latest is None:
        return EvmStatus(
            as_of=None,
            BAC=budget,
            PV=0.0,
            EV=None,
            AC=None,
            SPI=1.0,
            CPI=1.0,
            EAC=None,
            VAC=None,
            status_text="No progress reported yet.",
        )

    cpi = latest.cost_performance_index
    eac = budget / cpi if cpi > 0 else None
    vac = budget - eac if eac is not None else None
    status = EvmStatus(
        as_of=latest.period_end,
        BAC=budget,
        PV=latest.planned_value,
        EV=latest.earned_value,
        AC=latest.actual_cost,
        SPI=latest.schedule_performance_index,
        CPI=cpi,
        EAC=eac,
        VAC=vac,
        status_text="",
    )
    return replace(status, status_text=interpret_status(status))


def interpret_status(status: EvmStatus) -> str:
    parts = []

    if status.AC is None:
        parts.append("CPI: not available (no actual cost yet).")
    elif status.CPI >= 1.05:
        parts.append("Cost: under budget (good).")
    elif status.CPI >= 0.95:
        parts.append("Cost: roughly on budget.")
    else:
        parts.append("Cost: over budget (needs action).")

    if status.SPI >= 1.05:
        parts.append("Schedule: ahead.")
    elif status.SPI >= 0.95:
        parts.append("Schedule: on track.")
    else:
        parts.append("Schedule: behind (recover plan).")

    if status.EAC is not None and status.VAC is not None:
        if status.VAC >= 0:
            parts.append("Forecast: within budget at completion.")
        else:
            parts.append("Forecast: likely over budget at completion.")
    else:
        parts.append("VAC: not available.")

    return " ".join(parts)


__all__ = ["summarize_curve", "interpret_status"]
