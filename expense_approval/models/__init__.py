# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from expense_approval.models.base import Base, TimestampMixin
from expense_approval.models.enums import (
    DateRange,
    ExpenseCategory,
    ExpenseStatus,
    UserRole,
)
from expense_approval.models.expense import Expense
from expense_approval.models.session import AuthSession
from expense_approval.models.user import User

__all__ = [
    "AuthSession",
    "Base",
    "DateRange",
    "Expense",
    "ExpenseCategory",
    "ExpenseStatus",
    "TimestampMixin",
    "User",
    "UserRole",
]
