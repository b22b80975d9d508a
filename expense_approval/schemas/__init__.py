# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Pydantic schemas package."""

from expense_approval.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from expense_approval.schemas.expense import (
    ExpenseCreate,
    ExpenseFilters,
    ExpenseResponse,
    ExpenseReview,
    ExpenseUpdate,
)
from expense_approval.schemas.report import (
    Breakdown,
    DashboardSummary,
    ExpenseReport,
    ExpenseSummary,
)
from expense_approval.schemas.user import UserCreate, UserResponse, UserRoleUpdate

__all__ = [
    "AuthResponse",
    "Breakdown",
    "DashboardSummary",
    "ExpenseCreate",
    "ExpenseFilters",
    "ExpenseReport",
    "ExpenseResponse",
    "ExpenseReview",
    "ExpenseSummary",
    "ExpenseUpdate",
    "LoginRequest",
    "RegisterRequest",
    "UserCreate",
    "UserResponse",
    "UserRoleUpdate",
]
