# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Dashboard API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from expense_approval.api.deps import get_current_user, get_db
from expense_approval.models import User
from expense_approval.schemas.report import DashboardSummary
from expense_approval.services import report_service

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
def get_dashboard_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DashboardSummary:
    """Get aggregated dashboard summary for the current user.

    Totals cover the expenses the user can see; the review queue is only
    filled for managers and admins.
    """
    return report_service.get_dashboard_summary(db, current_user)
