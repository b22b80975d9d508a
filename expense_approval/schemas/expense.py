# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Expense schemas."""

import datetime
import uuid
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from expense_approval.models.enums import DateRange, ExpenseCategory, ExpenseStatus


class ExpenseBase(BaseModel):
    """Base expense schema."""

    title: str = Field(..., max_length=200)
    amount: Decimal = Field(..., decimal_places=2)
    date: datetime.date
    category: ExpenseCategory
    description: str
    receipt_reference: str | None = Field(None, max_length=500)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Validate that amount is positive and round to 2 decimal places."""
        if v <= 0:
            raise ValueError("Amount must be positive")
        return round(v, 2)


class ExpenseCreate(ExpenseBase):
    """Schema for creating an expense."""


class ExpenseUpdate(BaseModel):
    """Schema for editing an expense.

    Has no status field; status only moves through the submit, approve
    and reject actions.
    """

    title: str | None = Field(None, max_length=200)
    amount: Decimal | None = Field(None, decimal_places=2)
    date: datetime.date | None = None
    category: ExpenseCategory | None = None
    description: str | None = None
    receipt_reference: str | None = Field(None, max_length=500)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal | None) -> Decimal | None:
        """Validate that amount is positive and round to 2 decimal places."""
        if v is not None:
            if v <= 0:
                raise ValueError("Amount must be positive")
            return round(v, 2)
        return v


class ExpenseReview(BaseModel):
    """Schema for approving or rejecting an expense."""

    comments: str | None = None


class ExpenseFilters(BaseModel):
    """Filters applied to the visible expense set."""

    status: ExpenseStatus | None = None
    category: ExpenseCategory | None = None
    date_range: DateRange = DateRange.ALL
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None
    search: str | None = None


class ExpenseResponse(BaseModel):
    """Schema for expense response."""

    id: uuid.UUID
    title: str
    amount: Decimal
    date: datetime.date
    category: ExpenseCategory
    description: str
    status: ExpenseStatus
    receipt_reference: str | None
    submitted_by: uuid.UUID
    submitted_by_name: str
    submitted_at: datetime.datetime
    reviewed_by: uuid.UUID | None
    reviewed_by_name: str | None
    reviewed_at: datetime.datetime | None
    comments: str | None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = {"from_attributes": True}
