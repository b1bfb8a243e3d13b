"""Reporting API wrappers around renderer classes."""

from datetime import date
from pathlib import Path
from typing import List, Optional

from core.domain.curve import TimeSeriesPoint
from core.domain.snapshot import ScheduleSnapshot
from core.exceptions import BusinessRuleError
from core.reporting.contexts import ExcelReportContext
from core.reporting.renderers.evm import SCurveRenderer
from core.reporting.renderers.excel import ExcelReportRenderer
from core.services.evm import summarize_curve
from core.services.reporting import cost_breakdown_by_category, critical_path_summary, progress_status_counts


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _curve_budget(points: List[TimeSeriesPoint]) -> float:
    # the last point always plans 100%, so its PV is the budget
    return points[-1].planned_value if points else 0.0


def generate_scurve_png(
    points: List[TimeSeriesPoint],
    output_path: str | Path,
    currency: str = "",
) -> Path:
    if not points:
        raise BusinessRuleError("No S-curve points to plot.", code="EMPTY_CURVE")
    renderer = SCurveRenderer()
    return renderer.render(points, _ensure_parent(Path(output_path)), currency=currency)


def generate_excel_report(
    snapshot: ScheduleSnapshot,
    points: List[TimeSeriesPoint],
    output_path: str | Path,
    title: Optional[str] = None,
    currency: str = "",
    generated_on: date | None = None,
) -> Path:
    ctx = ExcelReportContext(
        title=title or snapshot.root.name,
        currency=currency,
        generated_on=generated_on or date.today(),
        snapshot=snapshot,
        critical_path=critical_path_summary(snapshot),
        progress=progress_status_counts(snapshot),
        cost_breakdown=cost_breakdown_by_category(snapshot),
        evm=summarize_curve(points, _curve_budget(points)) if points else None,
        evm_series=list(points),
    )
    return ExcelReportRenderer().render(ctx, _ensure_parent(Path(output_path)))


__all__ = ["generate_scurve_png", "generate_excel_report"]
