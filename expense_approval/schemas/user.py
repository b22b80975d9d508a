# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User schemas."""
import datetime
import uuid

from pydantic import BaseModel, EmailStr, Field

from expense_approval.models.enums import UserRole


class UserBase(BaseModel):
    """Base user schema."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    department: str | None = Field(None, max_length=100)


class UserCreate(UserBase):
    """Schema for registering a principal (admin use)."""

    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.EMPLOYEE


class UserRoleUpdate(BaseModel):
    """Schema for the administrative role change."""

    role: UserRole


class UserResponse(BaseModel):
    """Schema for user response."""

    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    department: str | None = None
    avatar_url: str | None = None
    is_active: bool
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = {"from_attributes": True}
