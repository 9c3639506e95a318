"""
Spreadsheet export of overtime audit findings.
"""

from datetime import datetime
from typing import Any, Dict, List
import os

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill


def _autosize(ws, limit: int = 50):
    for column in ws.columns:
        max_length = 0
        column_letter = column[0].column_letter
        for cell in column:
            if cell.value is not None and len(str(cell.value)) > max_length:
                max_length = len(str(cell.value))
        ws.column_dimensions[column_letter].width = min(max_length + 2, limit)


def export_overtime_audit_xlsx(findings: List[Dict[str, Any]], output_file: str) -> str:
    """
    Write incomplete-overtime findings to an Excel workbook.

    Args:
        findings: Output of ``OvertimeAuditor.find_incomplete``
        output_file: Path to output XLSX file

    Returns:
        Path to generated XLSX file
    """
    wb = Workbook()

    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")

    ws_summary = wb.active
    ws_summary.title = "Summary"
    ws_summary["A1"] = "Overtime Audit"
    ws_summary["A1"].font = Font(bold=True, size=16)
    ws_summary["A3"] = "Generated:"
    ws_summary["B3"] = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    ws_summary["A5"] = "Incomplete Requests:"
    ws_summary["B5"] = len(findings)
    ws_summary["A6"] = "Fixable:"
    ws_summary["B6"] = sum(1 for f in findings if f.get("proposed_fix"))

    ws = wb.create_sheet("Overtime")
    headers = [
        "Overtime ID",
        "Employee",
        "Date",
        "Start Time",
        "End Time",
        "Hours",
        "Pay",
        "Proposed Hours",
        "Proposed Pay",
        "Issue",
    ]
    ws.append(headers)
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font

    for finding in findings:
        fix = finding.get("proposed_fix") or {}
        ws.append(
            [
                finding.get("overtime_id"),
                finding.get("employee", ""),
                finding.get("date", ""),
                finding.get("start_time", ""),
                finding.get("end_time") or "",
                finding.get("total_hours"),
                finding.get("overtime_pay"),
                fix.get("total_hours"),
                fix.get("overtime_pay"),
                finding.get("issue") or "",
            ]
        )

    _autosize(ws)

    os.makedirs(
        os.path.dirname(output_file) if os.path.dirname(output_file) else ".", exist_ok=True
    )
    wb.save(output_file)

    return output_file
