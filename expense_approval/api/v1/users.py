# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User management API endpoints (admin only)."""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from expense_approval.api.deps import get_db, require_permission
from expense_approval.models import User, UserRole
from expense_approval.schemas.user import UserCreate, UserResponse, UserRoleUpdate
from expense_approval.services import identity_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def list_users(
    role: UserRole | None = None,
    department: str | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("user.manage")),
) -> list[UserResponse]:
    """List principals, optionally filtered by role, department or text."""
    users = identity_service.list_principals(
        db, current_user, role=role, department=department, search=search
    )
    return [UserResponse.model_validate(u) for u in users]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("user.manage")),
) -> UserResponse:
    """Register a new principal. The new principal is not logged in."""
    user = identity_service.register_principal(db, data)
    return UserResponse.model_validate(user)


@router.put("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: uuid.UUID,
    data: UserRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("user.manage")),
) -> UserResponse:
    """Change a principal's role."""
    user = identity_service.change_role(db, current_user, user_id, data.role)
    return UserResponse.model_validate(user)
