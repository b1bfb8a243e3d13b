from pathlib import Path
from typing import List

import matplotlib.pyplot as plt

from core.domain.curve import TimeSeriesPoint


class SCurveRenderer:
    def render(self, series: List[TimeSeriesPoint], output_path: Path, currency: str = "") -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        xs = [p.period_end for p in series]
        planned = [p.planned_percent for p in series]
        # no actuals after the status date: NaN breaks the line there
        actual = [float("nan") if p.actual_percent is None else p.actual_percent for p in series]
        pv = [p.planned_value for p in series]
        ev = [float("nan") if p.earned_value is None else p.earned_value for p in series]
        ac = [float("nan") if p.actual_cost is None else p.actual_cost for p in series]

        fig, (ax_pct, ax_val) = plt.subplots(2, 1, figsize=(9, 6), sharex=True)
        ax_pct.plot(xs, planned, label="Planned %")
        ax_pct.plot(xs, actual, label="Actual %")
        ax_pct.set_ylim(0, 105)
        ax_pct.set_ylabel("% complete")
        ax_pct.legend()
        ax_pct.grid(True, axis="y", linestyle=":", linewidth=0.6)

        ax_val.plot(xs, pv, label="PV")
        ax_val.plot(xs, ev, label="EV")
        ax_val.plot(xs, ac, label="AC")
        ax_val.set_ylabel(f"Value ({currency})" if currency else "Value")
        ax_val.legend()
        ax_val.grid(True, axis="y", linestyle=":", linewidth=0.6)

        fig.autofmt_xdate(rotation=30)
        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
