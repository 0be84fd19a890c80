"""Pydantic schemas for education API endpoints."""

from __future__ import annotations

from pydantic import Field

from portfolio_api.api.schemas.common import ApiModel, UtcDateTime


class EducationRequest(ApiModel):
    year: str = Field(..., min_length=1, max_length=50, description='Period, e.g. "2016-2020"')
    institution_name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class EducationResponse(ApiModel):
    id: str
    user_id: str
    year: str
    institution_name: str
    description: str | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime
