# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Expense API endpoints.

Service failures (Forbidden, InvalidState, NotFound, ValidationFailed) are
translated into HTTP responses by the application's exception handler.
Reads raise NotFound for missing and invisible expenses alike.
"""

import datetime
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from expense_approval.api.deps import get_current_user, get_db
from expense_approval.exceptions import NotFound
from expense_approval.models import User
from expense_approval.models.enums import DateRange, ExpenseCategory, ExpenseStatus
from expense_approval.schemas.expense import (
    ExpenseCreate,
    ExpenseFilters,
    ExpenseResponse,
    ExpenseReview,
    ExpenseUpdate,
)
from expense_approval.services import expense_service, report_service

router = APIRouter()


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(
    expense_status: ExpenseStatus | None = None,
    category: ExpenseCategory | None = None,
    date_range: DateRange = DateRange.ALL,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ExpenseResponse]:
    """List expenses visible to the current user, newest submissions first."""
    filters = ExpenseFilters(
        status=expense_status,
        category=category,
        date_range=date_range,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )
    expenses = report_service.filter_expenses(
        expense_service.list_expenses(db, current_user), filters
    )
    return [ExpenseResponse.model_validate(e) for e in expenses]


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    data: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ExpenseResponse:
    """Create a draft expense owned by the current user."""
    expense = expense_service.create_expense(db, current_user, data)
    return ExpenseResponse.model_validate(expense)


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ExpenseResponse:
    """Get a specific expense."""
    expense = expense_service.get_expense_by_id(db, current_user, expense_id)
    if not expense:
        raise NotFound("Expense not found")
    return ExpenseResponse.model_validate(expense)


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: uuid.UUID,
    data: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ExpenseResponse:
    """Edit a draft or rejected expense."""
    expense = expense_service.update_expense(db, current_user, expense_id, data)
    return ExpenseResponse.model_validate(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    """Delete a draft expense."""
    expense_service.delete_expense(db, current_user, expense_id)


@router.post("/{expense_id}/submit", response_model=ExpenseResponse)
def submit_expense(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ExpenseResponse:
    """Submit a draft or rejected expense for review."""
    expense = expense_service.submit_expense(db, current_user, expense_id)
    return ExpenseResponse.model_validate(expense)


@router.post("/{expense_id}/approve", response_model=ExpenseResponse)
def approve_expense(
    expense_id: uuid.UUID,
    data: ExpenseReview | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ExpenseResponse:
    """Approve a submitted expense."""
    comments = data.comments if data else None
    expense = expense_service.approve_expense(db, current_user, expense_id, comments)
    return ExpenseResponse.model_validate(expense)


@router.post("/{expense_id}/reject", response_model=ExpenseResponse)
def reject_expense(
    expense_id: uuid.UUID,
    data: ExpenseReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ExpenseResponse:
    """Reject a submitted expense with mandatory comments."""
    expense = expense_service.reject_expense(
        db, current_user, expense_id, data.comments
    )
    return ExpenseResponse.model_validate(expense)
