# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types for database models."""

from enum import Enum


class UserRole(str, Enum):
    """Role of a principal."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"


class ExpenseCategory(str, Enum):
    """Expense category enumeration."""

    TRAVEL = "travel"
    MEALS = "meals"
    ACCOMMODATION = "accommodation"
    EQUIPMENT = "equipment"
    OFFICE = "office"
    OTHER = "other"


class ExpenseStatus(str, Enum):
    """Expense status enumeration.

    Status flow:
        DRAFT → SUBMITTED → APPROVED
                    ↓   ↑
                  REJECTED
    """

    DRAFT = "draft"  # Editable by the owner, not yet sent
    SUBMITTED = "submitted"  # Awaiting review
    APPROVED = "approved"  # Final
    REJECTED = "rejected"  # Owner may edit and resubmit


class DateRange(str, Enum):
    """Date window presets for expense lists and reports."""

    ALL = "all"
    LAST_7_DAYS = "last7days"
    LAST_30_DAYS = "last30days"
    LAST_90_DAYS = "last90days"
    CUSTOM = "custom"
