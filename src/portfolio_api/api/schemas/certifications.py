"""Pydantic schemas for certification API endpoints."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, HttpUrl, PlainSerializer

from portfolio_api.api.schemas.common import ApiModel, SkillId, UtcDateTime
from portfolio_api.api.schemas.skills import SkillResponse

CertificateLink = Annotated[HttpUrl, PlainSerializer(str, return_type=str)]


class CertificationRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    issuing_organization: str = Field(..., min_length=1, max_length=255)
    year: int = Field(..., ge=1900, le=2100)
    description: str | None = None
    certificate_link: CertificateLink | None = Field(None, description="Verification URL")
    skill_ids: list[SkillId] = Field(default_factory=list)


class CertificationResponse(ApiModel):
    id: str
    user_id: str
    name: str
    issuing_organization: str
    year: int
    description: str | None = None
    certificate_link: str | None = None
    skills: list[SkillResponse] = Field(default_factory=list)
    created_at: UtcDateTime
    updated_at: UtcDateTime
