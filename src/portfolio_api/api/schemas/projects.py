"""Pydantic schemas for project API endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from portfolio_api.api.schemas.common import ApiModel, SkillId, UtcDateTime
from portfolio_api.api.schemas.skills import SkillResponse

SLUG_PATTERN = r"^[a-z0-9-]+$"


class ProjectRequest(ApiModel):
    """Request schema for creating or replacing a project.

    Sent as multipart form data when images are attached, JSON otherwise.
    """

    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(
        ...,
        min_length=1,
        max_length=255,
        pattern=SLUG_PATTERN,
        description="Lowercase letters, digits and hyphens; unique across all users",
    )
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, description="Rich text, may hold {{IMAGE_<i>}}")
    cover_image: str | None = Field(None, description="Cover URL when no file is uploaded")
    content_images: list[str] | None = Field(
        None, description="Content image URLs when no files are uploaded"
    )
    published: bool = False
    highlighted: bool = False
    published_at: UtcDateTime | None = None
    skill_ids: list[SkillId] = Field(default_factory=list)

    @field_validator("published", "highlighted", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        # Form fields arrive as strings; only an explicit "true" turns a flag on.
        return value is True or value == "true"


class ProjectResponse(ApiModel):
    id: str
    user_id: str
    title: str
    slug: str
    description: str
    content: str
    cover_image: str | None = None
    content_images: list[str] = Field(default_factory=list)
    published: bool
    highlighted: bool
    published_at: UtcDateTime | None = None
    skills: list[SkillResponse] = Field(default_factory=list)
    created_at: UtcDateTime
    updated_at: UtcDateTime
