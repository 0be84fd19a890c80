"""Experience routes for the API."""

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
from portfolio_api.api.schemas.experience import ExperienceRequest, ExperienceResponse
from portfolio_api.services.experience import (
    create_experience,
    delete_experience,
    get_experience,
    list_experiences,
    list_experiences_for_username,
    update_experience,
)

router = APIRouter(prefix="/experience", tags=["experience"], responses=ERROR_RESPONSES)


@router.get("", response_model=DataResponse[list[ExperienceResponse]])
def list_experience_entries(user_id: OptionalUserId) -> dict:
    """List the caller's experience, most recent start year first."""
    return ok(list_experiences(user_id))


@router.get("/user/{username}", response_model=DataResponse[list[ExperienceResponse]])
def list_user_experience(username: Annotated[str, Path(description="Username")]) -> dict:
    return ok(list_experiences_for_username(username))


@router.get("/{experience_id}", response_model=DataResponse[ExperienceResponse])
def get_experience_entry(
    experience_id: Annotated[str, Path(description="Experience entry ID")],
    user_id: OptionalUserId,
) -> dict:
    return ok(get_experience(user_id, experience_id))


@router.post(
    "",
    response_model=DataResponse[ExperienceResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_experience_entry(data: ExperienceRequest, user_id: CurrentUserId) -> dict:
    """Create an experience entry tagged with ``skillIds``."""
    return ok(create_experience(user_id, data.sent_fields("skill_ids")))


@router.put("/{experience_id}", response_model=DataResponse[ExperienceResponse])
def update_experience_entry(
    experience_id: Annotated[str, Path(description="Experience entry ID")],
    data: ExperienceRequest,
    user_id: CurrentUserId,
) -> dict:
    """Replace an entry's fields; ``skillIds`` replaces the whole tag set."""
    return ok(update_experience(user_id, experience_id, data.sent_fields("skill_ids")))


@router.delete("/{experience_id}", response_model=MessageResponse)
def delete_experience_entry(
    experience_id: Annotated[str, Path(description="Experience entry ID")],
    user_id: CurrentUserId,
) -> dict:
    delete_experience(user_id, experience_id)
    return deleted("Experience")
