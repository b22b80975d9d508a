# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from expense_approval.schemas.user import UserBase, UserResponse


class LoginRequest(BaseModel):
    """Schema for login with email and password."""

    email: EmailStr
    password: str


class RegisterRequest(UserBase):
    """Schema for the first-run registration of the initial admin."""

    password: str = Field(..., min_length=8)


class AuthStatusResponse(BaseModel):
    """Schema for the first-run check."""

    first_run: bool


class AuthResponse(BaseModel):
    """Schema for authentication response."""

    user: UserResponse
