from __future__ import annotations

from datetime import date

import pytest
from openpyxl import load_workbook

from core.exceptions import BusinessRuleError
from core.reporting import api as reporting_api
from core.services import ScheduleCriteria, ScheduleEngine


@pytest.fixture
def report_inputs(sample_rows):
    engine = ScheduleEngine()
    criteria = ScheduleCriteria(total_budget=1000, currency="USD", interval="week")
    snapshot = engine.build(sample_rows, criteria)
    points = engine.curve(snapshot, criteria, as_of=date(2024, 1, 5))
    return snapshot, points


def test_scurve_png_is_written(report_inputs, tmp_path):
    _snapshot, points = report_inputs
    out = reporting_api.generate_scurve_png(points, tmp_path / "charts" / "scurve.png", currency="USD")

    assert out.exists()
    assert out.stat().st_size > 0


def test_scurve_without_points_is_rejected(tmp_path):
    with pytest.raises(BusinessRuleError) as exc:
        reporting_api.generate_scurve_png([], tmp_path / "empty.png")
    assert exc.value.code == "EMPTY_CURVE"


def test_excel_report_sheets(report_inputs, tmp_path):
    snapshot, points = report_inputs
    out = reporting_api.generate_excel_report(
        snapshot,
        points,
        tmp_path / "report.xlsx",
        currency="USD",
        generated_on=date(2024, 2, 1),
    )

    wb = load_workbook(out)
    assert wb.sheetnames == ["Overview", "Schedule", "Cost Breakdown", "EVM"]

    overview = wb["Overview"]
    assert overview["A1"].value == "Schedule report - Project Summary: Overall Project"
    assert overview["B3"].value == "2024-02-01"
    assert overview["B4"].value == "USD"

    schedule = wb["Schedule"]
    assert schedule.max_row == len(snapshot) + 1
    assert [schedule.cell(row, 1).value for row in range(2, 5)] == ["ROOT-SUMMARY", "1", "1.1"]
    assert schedule.cell(5, 12).value == "Yes"

    breakdown = wb["Cost Breakdown"]
    assert breakdown["A2"].value == "Labor"
    assert breakdown["D4"].value == 60.0

    evm = wb["EVM"]
    assert evm["B4"].value == 1000.0
    assert evm["D3"].value == "2024-W01"
    assert evm["D4"].value == "2024-W02"
    assert evm["F4"].value in ("", None)


def test_excel_report_without_curve_skips_evm_sheet(sample_rows, tmp_path):
    snapshot = ScheduleEngine().build(sample_rows)
    out = reporting_api.generate_excel_report(snapshot, [], tmp_path / "plain.xlsx", title="Plain")

    wb = load_workbook(out)
    assert "EVM" not in wb.sheetnames
    assert wb["Overview"]["A1"].value == "Schedule report - Plain"
