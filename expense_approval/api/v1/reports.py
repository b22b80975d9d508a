# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Report API endpoints."""

import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from expense_approval.api.deps import get_db, require_permission
from expense_approval.models import User
from expense_approval.models.enums import DateRange, ExpenseCategory, ExpenseStatus
from expense_approval.schemas.expense import ExpenseFilters
from expense_approval.schemas.report import ExpenseReport
from expense_approval.services import report_generator, report_service

router = APIRouter()


def report_filters(
    expense_status: ExpenseStatus | None = None,
    category: ExpenseCategory | None = None,
    date_range: DateRange = DateRange.ALL,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    search: str | None = None,
) -> ExpenseFilters:
    """Collect report filters from query parameters."""
    return ExpenseFilters(
        status=expense_status,
        category=category,
        date_range=date_range,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )


@router.get("/summary", response_model=ExpenseReport)
def get_expense_report(
    filters: ExpenseFilters = Depends(report_filters),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("report.view")),
) -> ExpenseReport:
    """Filtered expense report with totals by status and category."""
    return report_service.build_report(db, current_user, filters)


@router.get("/export")
def export_expense_report(
    filters: ExpenseFilters = Depends(report_filters),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("report.view")),
) -> Response:
    """Download the filtered expense report as an Excel file."""
    content = report_generator.generate_report(db, current_user, filters)
    filename = report_generator.get_filename()

    return Response(
        content=content,
        media_type=report_generator.XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
        },
    )
