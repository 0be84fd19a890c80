"""Pydantic schemas for skill API endpoints."""

from __future__ import annotations

from pydantic import Field

from portfolio_api.api.schemas.common import ApiModel, UtcDateTime


class SkillRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=255, description="Skill name")
    icon: str | None = Field(None, description="Icon URL, used when no icon file is uploaded")


class SkillResponse(ApiModel):
    """Response schema for a skill, also embedded in tagged entries."""

    id: str
    user_id: str
    name: str
    icon: str
    created_at: UtcDateTime
    updated_at: UtcDateTime
