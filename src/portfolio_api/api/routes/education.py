"""Education routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, status

from portfolio_api.api.dependencies import CurrentUserId, OptionalUserId
from portfolio_api.api.schemas.common import (
    ERROR_RESPONSES,
    DataResponse,
    MessageResponse,
    deleted,
    ok,
)
from portfolio_api.api.schemas.education import EducationRequest, EducationResponse
from portfolio_api.services.education import (
    create_education,
    delete_education,
    get_education,
    list_educations,
    list_educations_for_username,
    update_education,
)

router = APIRouter(prefix="/education", tags=["education"], responses=ERROR_RESPONSES)


@router.get("", response_model=DataResponse[list[EducationResponse]])
def list_education_entries(user_id: OptionalUserId) -> dict:
    """List the caller's education entries, newest first."""
    return ok(list_educations(user_id))


@router.get("/user/{username}", response_model=DataResponse[list[EducationResponse]])
def list_user_education(username: Annotated[str, Path(description="Username")]) -> dict:
    """Public listing of a user's education entries."""
    return ok(list_educations_for_username(username))


@router.get("/{education_id}", response_model=DataResponse[EducationResponse])
def get_education_entry(
    education_id: Annotated[str, Path(description="Education entry ID")],
    user_id: OptionalUserId,
) -> dict:
    return ok(get_education(user_id, education_id))


@router.post(
    "",
    response_model=DataResponse[EducationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_education_entry(data: EducationRequest, user_id: CurrentUserId) -> dict:
    return ok(create_education(user_id, data.sent_fields()))


@router.put("/{education_id}", response_model=DataResponse[EducationResponse])
def update_education_entry(
    education_id: Annotated[str, Path(description="Education entry ID")],
    data: EducationRequest,
    user_id: CurrentUserId,
) -> dict:
    """Replace an education entry's fields."""
    return ok(update_education(user_id, education_id, data.sent_fields()))


@router.delete("/{education_id}", response_model=MessageResponse)
def delete_education_entry(
    education_id: Annotated[str, Path(description="Education entry ID")],
    user_id: CurrentUserId,
) -> dict:
    delete_education(user_id, education_id)
    return deleted("Education")
