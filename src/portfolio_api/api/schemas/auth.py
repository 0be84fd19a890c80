"""Pydantic schemas for registration, login and account endpoints."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from portfolio_api.api.schemas.common import ApiModel, UtcDateTime

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class RegisterRequest(BaseModel):
    """Request schema for creating an account."""

    email: EmailStr = Field(..., description="Login email, must be unique")
    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        pattern=USERNAME_PATTERN,
        description="Letters, numbers and underscores only",
    )
    password: str = Field(..., min_length=6, description="At least 6 characters")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(ApiModel):
    """Response schema for basic user information."""

    id: str
    email: str
    username: str
    name: str
    created_at: UtcDateTime | None = None


class AuthResponse(ApiModel):
    user: UserResponse
    token: str
