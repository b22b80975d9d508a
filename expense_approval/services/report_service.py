# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Reporting service: filters and derived aggregates over visible expenses.

Aggregates are computed from the expense set they are given on every call
and are never stored.
"""

from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from expense_approval.models import Expense, User
from expense_approval.models.enums import DateRange, ExpenseCategory, ExpenseStatus
from expense_approval.schemas.expense import ExpenseFilters, ExpenseResponse
from expense_approval.schemas.report import (
    Breakdown,
    DashboardSummary,
    ExpenseReport,
    ExpenseSummary,
)
from expense_approval.services import expense_service
from expense_approval.services.identity_service import require_permission

RECENT_EXPENSES_LIMIT = 5

PRESET_DAYS = {
    DateRange.LAST_7_DAYS: 7,
    DateRange.LAST_30_DAYS: 30,
    DateRange.LAST_90_DAYS: 90,
}


def summarize(expenses: Iterable[Expense]) -> ExpenseSummary:
    """Total, per-status and per-category counts and amounts, submitters."""
    by_status = {s.value: Breakdown() for s in ExpenseStatus}
    by_category = {c.value: Breakdown() for c in ExpenseCategory}
    submitters = set()
    total = Decimal("0")
    count = 0

    for expense in expenses:
        amount = Decimal(expense.amount)
        total += amount
        count += 1
        submitters.add(expense.submitted_by)

        status_bucket = by_status[expense.status.value]
        status_bucket.count += 1
        status_bucket.amount += amount

        category_bucket = by_category[expense.category.value]
        category_bucket.count += 1
        category_bucket.amount += amount

    return ExpenseSummary(
        total_amount=total,
        count=count,
        by_status=by_status,
        by_category=by_category,
        unique_submitters=len(submitters),
    )


def filter_expenses(
    expenses: Iterable[Expense],
    filters: ExpenseFilters,
    today: date | None = None,
) -> list[Expense]:
    """Apply status, category, date window and text search filters.

    Preset windows (last 7/30/90 days) count back from ``today``. For
    ``all`` and ``custom`` the optional start and end dates are applied,
    both inclusive. Search matches title, description or category,
    ignoring case.
    """
    today = today or date.today()
    result = list(expenses)

    if filters.status:
        result = [e for e in result if e.status == filters.status]

    if filters.category:
        result = [e for e in result if e.category == filters.category]

    if filters.date_range in PRESET_DAYS:
        start = today - timedelta(days=PRESET_DAYS[filters.date_range])
        result = [e for e in result if e.date >= start]
    else:
        if filters.start_date:
            result = [e for e in result if e.date >= filters.start_date]
        if filters.end_date:
            result = [e for e in result if e.date <= filters.end_date]

    if filters.search and filters.search.strip():
        query = filters.search.strip().lower()
        result = [
            e
            for e in result
            if query in e.title.lower()
            or query in e.description.lower()
            or query in e.category.value
        ]

    return result


def build_report(
    db: Session,
    principal: User,
    filters: ExpenseFilters,
    today: date | None = None,
) -> ExpenseReport:
    """Filtered report over the principal's visible expenses."""
    require_permission(principal, "report.view")

    visible = expense_service.list_expenses(db, principal)
    selected = filter_expenses(visible, filters, today=today)

    return ExpenseReport(
        filters=filters,
        summary=summarize(selected),
        expenses=[ExpenseResponse.model_validate(e) for e in selected],
    )


def _most_recent(expenses: Sequence[Expense], limit: int) -> list[Expense]:
    return sorted(expenses, key=lambda e: e.submitted_at, reverse=True)[:limit]


def get_dashboard_summary(db: Session, principal: User) -> DashboardSummary:
    """Dashboard for the principal: totals, recent and awaiting review."""
    visible = expense_service.list_expenses(db, principal)
    awaiting = expense_service.get_expenses_awaiting_review(db, principal)

    return DashboardSummary(
        summary=summarize(visible),
        recent_expenses=[
            ExpenseResponse.model_validate(e)
            for e in _most_recent(visible, RECENT_EXPENSES_LIMIT)
        ],
        awaiting_review=[ExpenseResponse.model_validate(e) for e in awaiting],
    )
