# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Report and dashboard schemas for derived expense aggregates."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

from expense_approval.schemas.expense import ExpenseFilters, ExpenseResponse

# Annotated type that serializes Decimal as float for JSON responses
SerializedDecimal = Annotated[Decimal, PlainSerializer(lambda x: float(x), return_type=float)]


class Breakdown(BaseModel):
    """Count and amount of one status or category bucket."""

    count: int = 0
    amount: SerializedDecimal = Decimal("0")


class ExpenseSummary(BaseModel):
    """Aggregates over a set of expenses."""

    total_amount: SerializedDecimal
    count: int
    by_status: dict[str, Breakdown]
    by_category: dict[str, Breakdown]
    unique_submitters: int


class ExpenseReport(BaseModel):
    """Filtered expense list with its aggregates."""

    filters: ExpenseFilters
    summary: ExpenseSummary
    expenses: list[ExpenseResponse]


class DashboardSummary(BaseModel):
    """Complete dashboard summary response."""

    summary: ExpenseSummary
    recent_expenses: list[ExpenseResponse]
    awaiting_review: list[ExpenseResponse]
