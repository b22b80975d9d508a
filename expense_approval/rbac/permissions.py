# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
# expense_approval/rbac/permissions.py
CORE_PERMISSIONS = [
    # Expense management
    {
        "code": "expense.create",
        "module": "core",
        "description": "Create, edit and submit own expenses",
    },
    {
        "code": "expense.view.all",
        "module": "core",
        "description": "View expenses of every principal",
    },
    {
        "code": "expense.review",
        "module": "core",
        "description": "Approve or reject submitted expenses",
    },
    # Reporting
    {
        "code": "report.view",
        "module": "core",
        "description": "View filtered expense reports",
    },
    # User management
    {
        "code": "user.manage",
        "module": "core",
        "description": "Register principals and change their roles",
    },
]
