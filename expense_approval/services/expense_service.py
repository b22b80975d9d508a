# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Expense lifecycle service.

Owns the expense collection and its state machine::

    create → DRAFT ──submit──→ SUBMITTED ──approve──→ APPROVED
                                  │   ↑
                           reject │   │ submit
                                  ↓   │
                                REJECTED

Every mutation (edit, delete and the status actions) runs through
``_run_action`` which, under a per-record lock, checks visibility,
entitlement, current status and input, in that order, before writing
anything and commits the whole change at once.
"""

import logging
import threading
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlalchemy.orm import Query, Session

from expense_approval.events import AppEvent, event_bus
from expense_approval.exceptions import (
    Forbidden,
    InvalidState,
    NotFound,
    ValidationFailed,
)
from expense_approval.models import Expense, User
from expense_approval.models.base import utcnow
from expense_approval.models.enums import ExpenseStatus
from expense_approval.schemas.expense import ExpenseCreate, ExpenseUpdate
from expense_approval.services.identity_service import (
    has_permission,
    require_permission,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "amount",
    "date",
    "category",
    "description",
    "receipt_reference",
)
REQUIRED_FIELDS = ("title", "amount", "date", "category", "description")


class Actor(str, Enum):
    """Who may perform an action on an expense."""

    OWNER = "owner"
    REVIEWER = "reviewer"


@dataclass(frozen=True)
class Action:
    """A guarded operation on an existing expense."""

    name: str
    actor: Actor
    allowed_from: frozenset[ExpenseStatus]
    target: ExpenseStatus | None
    event: AppEvent


EDIT = Action(
    "edit",
    Actor.OWNER,
    frozenset({ExpenseStatus.DRAFT, ExpenseStatus.REJECTED}),
    None,
    AppEvent.EXPENSE_UPDATED,
)
DELETE = Action(
    "delete",
    Actor.OWNER,
    frozenset({ExpenseStatus.DRAFT}),
    None,
    AppEvent.EXPENSE_DELETED,
)
SUBMIT = Action(
    "submit",
    Actor.OWNER,
    frozenset({ExpenseStatus.DRAFT, ExpenseStatus.REJECTED}),
    ExpenseStatus.SUBMITTED,
    AppEvent.EXPENSE_SUBMITTED,
)
APPROVE = Action(
    "approve",
    Actor.REVIEWER,
    frozenset({ExpenseStatus.SUBMITTED}),
    ExpenseStatus.APPROVED,
    AppEvent.EXPENSE_APPROVED,
)
REJECT = Action(
    "reject",
    Actor.REVIEWER,
    frozenset({ExpenseStatus.SUBMITTED}),
    ExpenseStatus.REJECTED,
    AppEvent.EXPENSE_REJECTED,
)


class _RecordLock:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


# Per-record locks serializing mutations of the same expense in this process.
# An entry lives only while some thread holds or waits for it.
_record_locks: dict[uuid.UUID, _RecordLock] = {}
_record_locks_guard = threading.Lock()


@contextmanager
def _record_lock(expense_id: uuid.UUID) -> Iterator[None]:
    with _record_locks_guard:
        entry = _record_locks.setdefault(expense_id, _RecordLock())
        entry.holders += 1
    try:
        with entry.lock:
            yield
    finally:
        with _record_locks_guard:
            entry.holders -= 1
            if entry.holders == 0:
                del _record_locks[expense_id]


# Visibility


def can_view_all(principal: User) -> bool:
    """Managers and admins see every expense; employees only their own."""
    return has_permission(principal, "expense.view.all")


def _visible_query(db: Session, principal: User) -> Query:
    query = db.query(Expense)
    if not can_view_all(principal):
        query = query.filter(Expense.submitted_by == principal.id)
    return query


def list_expenses(db: Session, principal: User) -> list[Expense]:
    """Expenses visible to the principal, most recently submitted first."""
    return (
        _visible_query(db, principal)
        .order_by(Expense.submitted_at.desc(), Expense.created_at.desc())
        .all()
    )


def get_expense_by_id(
    db: Session, principal: User, expense_id: uuid.UUID
) -> Expense | None:
    """Get an expense if it exists and is visible to the principal."""
    return _visible_query(db, principal).filter(Expense.id == expense_id).first()


def get_expenses_awaiting_review(db: Session, principal: User) -> list[Expense]:
    """Submitted expenses the principal could approve or reject."""
    if not has_permission(principal, "expense.review"):
        return []
    return (
        _visible_query(db, principal)
        .filter(Expense.status == ExpenseStatus.SUBMITTED)
        .order_by(Expense.submitted_at.asc())
        .all()
    )


# Validation


def _validate_fields(values: dict[str, Any]) -> None:
    """Business rules on expense fields; raises before anything is written."""
    for field in REQUIRED_FIELDS:
        if field not in values:
            continue
        value = values[field]
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationFailed(f"{field.capitalize()} is required")

    amount = values.get("amount")
    if amount is not None and Decimal(amount) <= 0:
        raise ValidationFailed("Amount must be a positive number")


def _require_comments(comments: str | None) -> str:
    if comments is None or not comments.strip():
        raise ValidationFailed("Comments are required when rejecting an expense")
    return comments.strip()


def _optional_comments(comments: str | None) -> str | None:
    if comments is None or not comments.strip():
        return None
    return comments.strip()


# Guarded mutation


def _authorize(principal: User, expense: Expense, action: Action) -> None:
    if action.actor is Actor.OWNER:
        if expense.submitted_by != principal.id:
            raise Forbidden(f"Only the owner may {action.name} this expense")
    elif not has_permission(principal, "expense.review"):
        raise Forbidden(f"Only managers and admins may {action.name} expenses")


def _event_data(expense: Expense, principal: User) -> dict[str, Any]:
    return {
        "expense_id": str(expense.id),
        "status": expense.status.value,
        "amount": float(expense.amount),
        "category": expense.category.value,
        "submitted_by": str(expense.submitted_by),
        "actor_id": str(principal.id),
    }


def _run_action(
    db: Session,
    principal: User,
    expense_id: uuid.UUID,
    action: Action,
    build_changes: Callable[[Expense], dict[str, Any]] | None = None,
) -> Expense:
    """Apply ``action`` to an expense atomically.

    ``build_changes`` computes the field values to write. It runs after the
    visibility, entitlement and status checks and may raise
    ValidationFailed; nothing has been modified at that point.
    """
    with _record_lock(expense_id):
        try:
            expense = (
                _visible_query(db, principal)
                .filter(Expense.id == expense_id)
                .with_for_update()
                .first()
            )
            if not expense:
                raise NotFound("Expense not found")

            _authorize(principal, expense, action)

            if expense.status not in action.allowed_from:
                raise InvalidState(
                    f"Cannot {action.name} an expense in status "
                    f"{expense.status.value}"
                )

            changes = build_changes(expense) if build_changes else {}
            previous_status = expense.status

            if action is DELETE:
                db.delete(expense)
            else:
                for field, value in changes.items():
                    setattr(expense, field, value)
                if action.target is not None:
                    expense.status = action.target
            db.commit()
        except Exception:
            # Releases the row lock and discards any pending change
            db.rollback()
            raise

        if action is DELETE:
            data = {"expense_id": str(expense_id), "actor_id": str(principal.id)}
        else:
            db.refresh(expense)
            data = _event_data(expense, principal)

    logger.info(
        f"{principal.email} {action.name} expense {expense_id} "
        f"({previous_status.value} -> "
        f"{action.target.value if action.target else previous_status.value})"
    )
    event_bus.publish_sync(action.event, data)

    return expense


# Operations


def create_expense(db: Session, principal: User, data: ExpenseCreate) -> Expense:
    """Create a draft expense owned by the principal."""
    require_permission(principal, "expense.create")
    values = data.model_dump()
    _validate_fields(values)

    expense = Expense(
        title=values["title"].strip(),
        amount=values["amount"],
        date=values["date"],
        category=values["category"],
        description=values["description"].strip(),
        receipt_reference=values.get("receipt_reference"),
        status=ExpenseStatus.DRAFT,
        submitted_by=principal.id,
        submitted_by_name=principal.name,
        submitted_at=utcnow(),
    )
    try:
        db.add(expense)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(expense)

    logger.info(f"{principal.email} created expense {expense.id}")
    event_bus.publish_sync(AppEvent.EXPENSE_CREATED, _event_data(expense, principal))

    return expense


def update_expense(
    db: Session, principal: User, expense_id: uuid.UUID, data: ExpenseUpdate
) -> Expense:
    """Overwrite editable fields of a draft or rejected expense."""
    values = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if field in EDITABLE_FIELDS
    }

    def build_changes(expense: Expense) -> dict[str, Any]:
        _validate_fields(values)
        return {
            field: value.strip() if field in ("title", "description") else value
            for field, value in values.items()
        }

    return _run_action(db, principal, expense_id, EDIT, build_changes)


def delete_expense(db: Session, principal: User, expense_id: uuid.UUID) -> None:
    """Permanently remove a draft expense."""
    _run_action(db, principal, expense_id, DELETE)


def submit_expense(db: Session, principal: User, expense_id: uuid.UUID) -> Expense:
    """Send a draft or rejected expense for review.

    Review fields of an earlier rejection are kept as history.
    """
    return _run_action(db, principal, expense_id, SUBMIT)


def approve_expense(
    db: Session,
    principal: User,
    expense_id: uuid.UUID,
    comments: str | None = None,
) -> Expense:
    """Approve a submitted expense; comments are optional."""

    def build_changes(expense: Expense) -> dict[str, Any]:
        return {
            "reviewed_by": principal.id,
            "reviewed_by_name": principal.name,
            "reviewed_at": utcnow(),
            "comments": _optional_comments(comments),
        }

    return _run_action(db, principal, expense_id, APPROVE, build_changes)


def reject_expense(
    db: Session,
    principal: User,
    expense_id: uuid.UUID,
    comments: str | None,
) -> Expense:
    """Reject a submitted expense; non-blank comments are mandatory."""

    def build_changes(expense: Expense) -> dict[str, Any]:
        return {
            "reviewed_by": principal.id,
            "reviewed_by_name": principal.name,
            "reviewed_at": utcnow(),
            "comments": _require_comments(comments),
        }

    return _run_action(db, principal, expense_id, REJECT, build_changes)
