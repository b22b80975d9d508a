# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Expense report export as an Excel workbook."""

import io
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from sqlalchemy.orm import Session

from expense_approval.models import User
from expense_approval.schemas.expense import ExpenseFilters, ExpenseResponse
from expense_approval.services import report_service

EXPORT_HEADERS = ["Title", "Amount", "Date", "Category", "Status", "Submitted By"]
HEADER_ROW = 4
XLSX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)


def _describe_filters(filters: ExpenseFilters) -> str:
    parts = [f"Range: {filters.date_range.value}"]
    if filters.status:
        parts.append(f"Status: {filters.status.value}")
    if filters.category:
        parts.append(f"Category: {filters.category.value}")
    if filters.start_date:
        parts.append(f"From: {filters.start_date.isoformat()}")
    if filters.end_date:
        parts.append(f"To: {filters.end_date.isoformat()}")
    if filters.search and filters.search.strip():
        parts.append(f"Search: {filters.search.strip()}")
    return ", ".join(parts)


def create_excel(
    expenses: Sequence[ExpenseResponse],
    filters: ExpenseFilters,
) -> bytes:
    """Create the spreadsheet: one row per expense plus a total row."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Expenses"

    # Styles
    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(
        start_color="4472C4", end_color="4472C4", fill_type="solid"
    )
    header_alignment = Alignment(horizontal="center", vertical="center")
    border = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )
    amount_format = "#,##0.00"
    date_format = "YYYY-MM-DD"

    # Title and info rows
    ws.merge_cells("A1:F1")
    title_cell = ws["A1"]
    title_cell.value = "Expense Report"
    title_cell.font = Font(bold=True, size=14)
    title_cell.alignment = Alignment(horizontal="center")
    ws["A2"] = f"Filters: {_describe_filters(filters)}"
    ws["A3"] = f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}"

    for col, header in enumerate(EXPORT_HEADERS, 1):
        cell = ws.cell(row=HEADER_ROW, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment
        cell.border = border

    total = Decimal(0)
    for idx, expense in enumerate(expenses, 1):
        row = HEADER_ROW + idx
        ws.cell(row=row, column=1, value=expense.title).border = border

        amount_cell = ws.cell(row=row, column=2, value=float(expense.amount))
        amount_cell.number_format = amount_format
        amount_cell.border = border

        date_cell = ws.cell(row=row, column=3, value=expense.date)
        date_cell.number_format = date_format
        date_cell.border = border

        ws.cell(row=row, column=4, value=expense.category.value).border = border
        ws.cell(row=row, column=5, value=expense.status.value).border = border
        ws.cell(row=row, column=6, value=expense.submitted_by_name).border = border

        total += expense.amount

    total_row = HEADER_ROW + len(expenses) + 1
    ws.cell(row=total_row, column=1, value="Total:").font = Font(bold=True)
    total_cell = ws.cell(row=total_row, column=2, value=float(total))
    total_cell.font = Font(bold=True)
    total_cell.number_format = amount_format

    column_widths = [35, 12, 12, 16, 12, 24]
    for col, width in enumerate(column_widths, 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def get_filename(today: date | None = None) -> str:
    """Get the download filename for an export made on ``today``."""
    today = today or date.today()
    return f"expense_report_{today.isoformat()}.xlsx"


def generate_report(
    db: Session,
    principal: User,
    filters: ExpenseFilters,
    today: date | None = None,
) -> bytes:
    """Export the filtered report the principal may view.

    Applies the same filters and ``report.view`` check as the report summary.
    """
    report = report_service.build_report(db, principal, filters, today=today)
    return create_excel(report.expenses, filters)
