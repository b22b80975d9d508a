# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from expense_approval.api.v1 import auth, dashboard, expenses, reports, users

api_router = APIRouter()

# Auth routes
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Dashboard routes
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])

# Expense routes
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])

# Report routes
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])

# User management routes
api_router.include_router(users.router)
