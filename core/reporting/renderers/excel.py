from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import ExcelReportContext


class ExcelReportRenderer:
    def render(self, ctx: ExcelReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        critical_font = Font(bold=True, color="C00000")
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")

        def header_row(sheet, headers, row=1):
            for col_index, h in enumerate(headers, start=1):
                cell = sheet.cell(row=row, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"

        ws["A1"] = f"Schedule report - {ctx.title}"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        cp = ctx.critical_path
        kv("Generated on", ctx.generated_on.isoformat())
        kv("Currency", ctx.currency or "-")
        kv("Project start", cp.project_start.isoformat())
        kv("Project finish", cp.project_finish.isoformat())
        kv("Duration (days)", cp.project_horizon_days)

        row += 1
        kv("Activities - total", ctx.progress.total)
        kv("Activities - done", ctx.progress.done)
        kv("Activities - in progress", ctx.progress.in_progress)
        kv("Activities - not started", ctx.progress.not_started)
        kv("Critical activities", cp.critical_count)
        kv("Critical cost", cp.critical_cost)
        kv("Worst float (days)", "" if cp.worst_float is None else cp.worst_float)

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 25

        # ---------------- Schedule ----------------
        ws_s = wb.create_sheet("Schedule")
        header_row(
            ws_s,
            ["ID", "Name", "Kind", "Start", "End", "Duration (days)", "Cost", "% complete",
             "ES", "EF", "Float", "Critical", "Resource"],
        )

        for r_i, a in enumerate(ctx.snapshot.activities, start=2):
            info = a.schedule
            values = [
                a.id,
                a.name,
                a.kind.value.title(),
                a.start.isoformat(),
                a.end.isoformat(),
                a.duration_days,
                float(a.cost),
                a.progress,
                "" if info is None else info.early_start,
                "" if info is None else info.early_finish,
                "" if info is None else info.total_float,
                "Yes" if a.is_critical else "No",
                a.resource,
            ]
            for c_i, v in enumerate(values, start=1):
                cell = ws_s.cell(r_i, c_i, v)
                cell.border = thin_border
            name_cell = ws_s.cell(r_i, 2)
            name_cell.alignment = Alignment(indent=a.depth)
            if a.is_group:
                name_cell.font = header_font
            elif a.is_critical:
                name_cell.font = critical_font

        ws_s.column_dimensions["A"].width = 16
        ws_s.column_dimensions["B"].width = 40
        for col_letter in ("C", "D", "E", "F", "G", "H", "I", "J", "K", "L"):
            ws_s.column_dimensions[col_letter].width = 13
        ws_s.column_dimensions["M"].width = 28

        # ---------------- Cost breakdown ----------------
        ws_c = wb.create_sheet("Cost Breakdown")
        header_row(ws_c, ["Category", "Activities", "Cost", "Share (%)"])
        for r_i, line in enumerate(ctx.cost_breakdown, start=2):
            values = [line.category.value.title(), line.activity_count, line.cost, round(line.share * 100.0, 2)]
            for c_i, v in enumerate(values, start=1):
                ws_c.cell(r_i, c_i, v).border = thin_border
        for col_letter in ("A", "B", "C", "D"):
            ws_c.column_dimensions[col_letter].width = 16

        # ---------------- EVM ----------------
        if ctx.evm or ctx.evm_series:
            ws_evm = wb.create_sheet("EVM")
            ws_evm["A1"] = "Earned Value Management"
            ws_evm["A1"].font = title_font

            if ctx.evm:
                ws_evm["A2"], ws_evm["B2"] = ("Metric", "Value")
                for ref in ("A2", "B2"):
                    ws_evm[ref].font = header_font
                    ws_evm[ref].fill = header_fill
                    ws_evm[ref].border = thin_border

                rows = [
                    ("As of", ctx.evm.as_of.isoformat() if ctx.evm.as_of else None),
                    ("BAC", ctx.evm.BAC),
                    ("PV", ctx.evm.PV),
                    ("EV", ctx.evm.EV),
                    ("AC (estimated)", ctx.evm.AC),
                    ("SPI", ctx.evm.SPI),
                    ("CPI", ctx.evm.CPI),
                    ("EAC", ctx.evm.EAC),
                    ("VAC", ctx.evm.VAC),
                    ("Status", ctx.evm.status_text),
                ]

                for i, (k, v) in enumerate(rows, start=3):
                    ws_evm[f"A{i}"] = k
                    if isinstance(v, (int, float)):
                        ws_evm[f"B{i}"] = float(v)
                    elif v is None:
                        ws_evm[f"B{i}"] = ""
                    else:
                        ws_evm[f"B{i}"] = str(v)
                    ws_evm[f"A{i}"].border = thin_border
                    ws_evm[f"B{i}"].border = thin_border

                ws_evm.column_dimensions["A"].width = 22
                ws_evm.column_dimensions["B"].width = 18

            if ctx.evm_series:
                columns = ("D", "E", "F", "G", "H", "I", "J", "K", "L")
                titles = ("Period", "Planned %", "Actual %", "PV", "EV", "AC", "SPI", "CPI", "Period End")
                for col, title in zip(columns, titles):
                    ws_evm[f"{col}2"] = title
                    ws_evm[f"{col}2"].font = header_font
                    ws_evm[f"{col}2"].fill = header_fill
                    ws_evm[f"{col}2"].border = thin_border

                for idx, point in enumerate(ctx.evm_series, start=3):
                    values = (
                        point.period_label,
                        round(point.planned_percent, 2),
                        "" if point.actual_percent is None else round(point.actual_percent, 2),
                        point.planned_value,
                        "" if point.earned_value is None else point.earned_value,
                        "" if point.actual_cost is None else point.actual_cost,
                        round(point.schedule_performance_index, 2),
                        round(point.cost_performance_index, 2),
                        point.period_end.isoformat(),
                    )
                    for col, v in zip(columns, values):
                        ws_evm[f"{col}{idx}"] = v
                        ws_evm[f"{col}{idx}"].border = thin_border

                for col in columns:
                    ws_evm.column_dimensions[col].width = 14

        wb.save(output_path)
        return output_path
