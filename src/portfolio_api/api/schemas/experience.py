"""Pydantic schemas for experience API endpoints."""

from __future__ import annotations

from pydantic import Field

from portfolio_api.api.schemas.common import ApiModel, SkillId, UtcDateTime
from portfolio_api.api.schemas.skills import SkillResponse


class ExperienceRequest(ApiModel):
    """Request schema for creating or replacing an experience entry."""

    start_year: int = Field(..., ge=1900, le=2100, description="Year the role started")
    end_year: int | None = Field(
        None, ge=1900, le=2100, description="Year the role ended, null if current"
    )
    company_name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    location: str = Field(..., min_length=1, max_length=255)
    skill_ids: list[SkillId] = Field(
        default_factory=list, description="Skills to tag; replaces the existing tags"
    )


class ExperienceResponse(ApiModel):
    id: str
    user_id: str
    start_year: int
    end_year: int | None = None
    company_name: str
    description: str | None = None
    location: str
    skills: list[SkillResponse] = Field(default_factory=list)
    created_at: UtcDateTime
    updated_at: UtcDateTime
