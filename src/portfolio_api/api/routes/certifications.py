"""Certification routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, status

from portfolio_api.api.dependencies import CurrentUserId, OptionalUserId
from portfolio_api.api.schemas.certifications import (
    CertificationRequest,
    CertificationResponse,
)
from portfolio_api.api.schemas.common import (
    ERROR_RESPONSES,
    DataResponse,
    MessageResponse,
    deleted,
    ok,
)
from portfolio_api.services.certifications import (
    create_certification,
    delete_certification,
    get_certification,
    list_certifications,
    update_certification,
)

router = APIRouter(prefix="/certifications", tags=["certifications"], responses=ERROR_RESPONSES)

CertificationId = Annotated[str, Path(description="Certification ID")]


@router.get("", response_model=DataResponse[list[CertificationResponse]])
def list_certification_entries(user_id: OptionalUserId) -> dict:
    return ok(list_certifications(user_id))


@router.get("/{certification_id}", response_model=DataResponse[CertificationResponse])
def get_certification_entry(certification_id: CertificationId, user_id: OptionalUserId) -> dict:
    return ok(get_certification(user_id, certification_id))


@router.post(
    "",
    response_model=DataResponse[CertificationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_certification_entry(data: CertificationRequest, user_id: CurrentUserId) -> dict:
    """Create a certification tagged with ``skillIds``."""
    return ok(create_certification(user_id, data.sent_fields("skill_ids")))


@router.put("/{certification_id}", response_model=DataResponse[CertificationResponse])
def update_certification_entry(
    certification_id: CertificationId, data: CertificationRequest, user_id: CurrentUserId
) -> dict:
    return ok(update_certification(user_id, certification_id, data.sent_fields("skill_ids")))


@router.delete("/{certification_id}", response_model=MessageResponse)
def delete_certification_entry(certification_id: CertificationId, user_id: CurrentUserId) -> dict:
    delete_certification(user_id, certification_id)
    return deleted("Certification")
