"""Pydantic schemas for the generic image upload endpoint."""

from __future__ import annotations

from portfolio_api.api.schemas.common import ApiModel


class UploadResponse(ApiModel):
    url: str
    file_id: str
    name: str
    size: int
    width: int = 0
    height: int = 0
