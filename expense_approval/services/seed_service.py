# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Demo data seeding for development installs."""

import logging
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from expense_approval.models import Expense, User
from expense_approval.models.enums import ExpenseCategory, ExpenseStatus, UserRole
from expense_approval.security import get_password_hash
from expense_approval.services.identity_service import default_avatar_url

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"  # nosec - demo accounts only  # noqa: S105

DEMO_USERS = [
    {
        "name": "John Employee",
        "email": "employee@example.com",
        "role": UserRole.EMPLOYEE,
        "department": "Marketing",
    },
    {
        "name": "Sarah Manager",
        "email": "manager@example.com",
        "role": UserRole.MANAGER,
        "department": "Finance",
    },
    {
        "name": "David Admin",
        "email": "admin@example.com",
        "role": UserRole.ADMIN,
        "department": "Operations",
    },
    {
        "name": "Emily Johnson",
        "email": "emily@example.com",
        "role": UserRole.EMPLOYEE,
        "department": "Sales",
    },
    {
        "name": "Michael Chen",
        "email": "michael@example.com",
        "role": UserRole.MANAGER,
        "department": "Engineering",
    },
]

# (owner email, reviewer email or None, expense fields)
DEMO_EXPENSES = [
    (
        "employee@example.com",
        "manager@example.com",
        {
            "title": "Business Trip to New York",
            "amount": Decimal("1250.75"),
            "date": date(2023, 10, 15),
            "category": ExpenseCategory.TRAVEL,
            "description": "Flight and taxi expenses for the quarterly meeting",
            "status": ExpenseStatus.APPROVED,
            "receipt_reference": "https://example.com/receipt1.pdf",
            "submitted_at": datetime(2023, 10, 16, 10, 30),
            "reviewed_at": datetime(2023, 10, 17, 14, 20),
        },
    ),
    (
        "employee@example.com",
        None,
        {
            "title": "Team Lunch",
            "amount": Decimal("187.50"),
            "date": date(2023, 10, 20),
            "category": ExpenseCategory.MEALS,
            "description": "Team lunch after project completion",
            "status": ExpenseStatus.SUBMITTED,
            "submitted_at": datetime(2023, 10, 21, 9, 15),
        },
    ),
    (
        "employee@example.com",
        "manager@example.com",
        {
            "title": "New Laptop",
            "amount": Decimal("1899.99"),
            "date": date(2023, 10, 22),
            "category": ExpenseCategory.EQUIPMENT,
            "description": "Replacement laptop for development team",
            "status": ExpenseStatus.REJECTED,
            "receipt_reference": "https://example.com/receipt3.pdf",
            "submitted_at": datetime(2023, 10, 23, 11, 45),
            "reviewed_at": datetime(2023, 10, 24, 16, 30),
            "comments": "Please use the standard equipment request process instead",
        },
    ),
]


def seed_demo_data(db: Session) -> int:
    """Seed demo principals and expenses.

    This function is idempotent: existing emails are skipped and expenses
    are only added when the expense table is empty. Returns the number of
    principals created.
    """
    created = 0
    users: dict[str, User] = {}
    for user_data in DEMO_USERS:
        user = db.query(User).filter(User.email == user_data["email"]).first()
        if not user:
            user = User(
                hashed_password=get_password_hash(DEMO_PASSWORD),
                avatar_url=default_avatar_url(user_data["name"]),
                is_active=True,
                **user_data,
            )
            db.add(user)
            created += 1
        users[user_data["email"]] = user
    db.flush()  # Flush to get the user IDs

    if db.query(Expense).count() == 0:
        for owner_email, reviewer_email, fields in DEMO_EXPENSES:
            owner = users[owner_email]
            expense = Expense(
                submitted_by=owner.id,
                submitted_by_name=owner.name,
                **fields,
            )
            if reviewer_email:
                reviewer = users[reviewer_email]
                expense.reviewed_by = reviewer.id
                expense.reviewed_by_name = reviewer.name
            db.add(expense)

    db.commit()
    logger.info(f"Seeded {created} demo principals")
    return created
