"""Excel writer for eligibility reports."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from attendance_eligibility.models.request import ValidationInput
from attendance_eligibility.models.validation import PhaseStatus, ValidationReport

ReportRow = tuple[ValidationInput, ValidationReport]

_STATUS_FILLS = {
    PhaseStatus.PASSED: PatternFill("solid", fgColor="E2EFDA"),
    PhaseStatus.FAILED: PatternFill("solid", fgColor="F8CBAD"),
    PhaseStatus.BLOCKED: PatternFill("solid", fgColor="D9D9D9"),
}

_SUMMARY_HEADERS = [
    "Date",
    "User",
    "Grade",
    "Section",
    "Status",
    "Action",
    "Valid",
    "Errors",
    "Warnings",
]
_PHASE_HEADERS = ["Phase", "Name", "Status", "Detail"]


def write_reports_excel(filepath: str | Path, rows: Sequence[ReportRow]) -> None:
    """Write one summary sheet plus one phase sheet per report."""
    filepath = Path(filepath)
    wb = Workbook()

    _write_summary_sheet(wb.active, rows)
    for index, (request, report) in enumerate(rows, 1):
        ws = wb.create_sheet(title=f"Request {index}")
        _write_phase_sheet(ws, request, report)

    wb.save(str(filepath))


def _header_style():
    return (
        Font(bold=True, size=11, name="Arial"),
        PatternFill("solid", fgColor="DAEEF3"),
        Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        ),
    )


def _write_headers(ws, row: int, headers: list[str]) -> None:
    font, fill, border = _header_style()
    for col_idx, label in enumerate(headers, 1):
        cell = ws.cell(row=row, column=col_idx, value=label)
        cell.font = font
        cell.fill = fill
        cell.border = border
        cell.alignment = Alignment(horizontal="center", vertical="center")


def _write_summary_sheet(ws, rows: Sequence[ReportRow]) -> None:
    ws.title = "Summary"
    ws.cell(row=1, column=1, value="Attendance eligibility")
    ws.cell(row=1, column=1).font = Font(bold=True, size=14, name="Arial")
    _write_headers(ws, 3, _SUMMARY_HEADERS)

    for offset, (request, report) in enumerate(rows):
        row_num = 4 + offset
        values = [
            request.date.isoformat(),
            request.user_id,
            request.grade_id,
            request.section_id,
            request.attendance_status_id,
            request.action.value,
            "yes" if report.valid else "no",
            "; ".join(report.errors),
            "; ".join(report.warnings),
        ]
        for col_idx, value in enumerate(values, 1):
            ws.cell(row=row_num, column=col_idx, value=value)
        verdict = PhaseStatus.PASSED if report.valid else PhaseStatus.FAILED
        ws.cell(row=row_num, column=7).fill = _STATUS_FILLS[verdict]

    for col_idx, width in enumerate([12, 8, 8, 8, 8, 8, 8, 60, 40], 1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def _write_phase_sheet(ws, request: ValidationInput, report: ValidationReport) -> None:
    ws.cell(row=1, column=1, value=f"{request.date.isoformat()} section {request.section_id}")
    ws.cell(row=1, column=1).font = Font(bold=True, size=12, name="Arial")
    _write_headers(ws, 3, _PHASE_HEADERS)

    for offset, result in enumerate(report.phases):
        row_num = 4 + offset
        detail = result.error or "; ".join(result.warnings)
        ws.cell(row=row_num, column=1, value=result.phase)
        ws.cell(row=row_num, column=2, value=result.name)
        status_cell = ws.cell(row=row_num, column=3, value=result.status.value)
        status_cell.fill = _STATUS_FILLS[result.status]
        ws.cell(row=row_num, column=4, value=detail)

    for col_idx, width in enumerate([8, 26, 10, 70], 1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width
