# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Services package."""
from expense_approval.services import (
    identity_service,
    expense_service,
    report_service,
    report_generator,
    seed_service,
)

__all__ = [
    "expense_service",
    "identity_service",
    "report_generator",
    "report_service",
    "seed_service",
]
