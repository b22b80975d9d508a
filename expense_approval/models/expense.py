# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Expense model."""

import datetime
import uuid as uuid_lib
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from expense_approval.models.base import Base, TimestampMixin
from expense_approval.models.enums import ExpenseCategory, ExpenseStatus


class Expense(Base, TimestampMixin):
    """Expense claim owned by the principal who created it.

    ``submitted_by_name`` and ``reviewed_by_name`` are snapshots of the
    principal's name at the time of the action and are kept even if the
    principal is renamed later.
    """

    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expenses_amount_positive"),
    )

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    category: Mapped[ExpenseCategory] = mapped_column(
        Enum(ExpenseCategory),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ExpenseStatus] = mapped_column(
        Enum(ExpenseStatus),
        default=ExpenseStatus.DRAFT,
        nullable=False,
        index=True,
    )
    receipt_reference: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Ownership, fixed at creation
    submitted_by: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    submitted_by_name: Mapped[str] = mapped_column(String(200), nullable=False)
    submitted_at: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False)

    # Last review, stamped together by approve/reject
    reviewed_by: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=True,
    )
    reviewed_by_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    reviewed_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
