"""Pydantic schemas for the user profile endpoints."""

from __future__ import annotations

from pydantic import Field

from portfolio_api.api.schemas.common import ApiModel, UtcDateTime


class UserProfileRequest(ApiModel):
    """Request schema for creating or replacing a profile."""

    name: str = Field(..., min_length=1, max_length=255, description="Name shown on the profile")
    role: str = Field(..., min_length=1, max_length=255, description="Headline role")
    description: str | None = Field(None, description="Short biography")
    social_medias: list[str] | None = Field(None, description="Social media links")
    profile_photo: str | None = Field(
        None, description="Photo URL, used when no profilePhoto file is uploaded"
    )


class UserProfileResponse(ApiModel):
    """Response schema for user profile data."""

    id: str
    user_id: str
    name: str
    role: str
    description: str | None = None
    social_medias: list[str] = Field(default_factory=list)
    profile_photo: str | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime
