# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
# expense_approval/rbac/roles.py
from expense_approval.models.enums import UserRole

from .permissions import CORE_PERMISSIONS

# Admin always gets all core permissions
ADMIN_PERMISSIONS = frozenset(p["code"] for p in CORE_PERMISSIONS)

REVIEWER_ROLES = frozenset({UserRole.MANAGER, UserRole.ADMIN})

ROLE_PERMISSIONS: dict[UserRole, frozenset[str]] = {
    UserRole.EMPLOYEE: frozenset({"expense.create"}),
    UserRole.MANAGER: frozenset(
        {
            "expense.create",
            "expense.view.all",
            "expense.review",
            "report.view",
        }
    ),
    UserRole.ADMIN: ADMIN_PERMISSIONS,
}
