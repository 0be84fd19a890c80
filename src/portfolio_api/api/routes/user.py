"""User profile routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, Request, status
from fastapi.concurrency import run_in_threadpool

from portfolio_api.api.dependencies import CurrentUserId, OptionalUserId
from portfolio_api.api.schemas.common import ERROR_RESPONSES, DataResponse, ok
from portfolio_api.api.schemas.users import UserProfileRequest, UserProfileResponse
from portfolio_api.api.uploads import read_payload, read_single_image
from portfolio_api.services.user_profile import (
    create_user_profile,
    get_user_profile,
    get_user_profile_by_username,
    update_user_profile,
)

router = APIRouter(prefix="/user", tags=["user"], responses=ERROR_RESPONSES)

_LIST_FIELDS = ("socialMedias", "social_medias")


@router.get("", response_model=DataResponse[UserProfileResponse])
def get_profile(user_id: OptionalUserId) -> dict:
    """Return the caller's profile."""
    return ok(get_user_profile(user_id))


@router.get("/{username}", response_model=DataResponse[UserProfileResponse])
def get_profile_by_username(username: Annotated[str, Path(description="Username")]) -> dict:
    """Public profile of the named user."""
    return ok(get_user_profile_by_username(username))


@router.post(
    "",
    response_model=DataResponse[UserProfileResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_profile(request: Request, user_id: CurrentUserId) -> dict:
    """Create the caller's profile; ``profilePhoto`` may be a file or a URL."""
    async with read_payload(request, _LIST_FIELDS) as payload:
        data = UserProfileRequest.model_validate(payload.data)
        photo = await read_single_image(payload, "profilePhoto")
    return ok(await run_in_threadpool(create_user_profile, user_id, data.sent_fields(), photo))


@router.put("", response_model=DataResponse[UserProfileResponse])
async def update_profile(request: Request, user_id: CurrentUserId) -> dict:
    """Update the caller's profile; without a new photo the stored one is kept."""
    async with read_payload(request, _LIST_FIELDS) as payload:
        data = UserProfileRequest.model_validate(payload.data)
        photo = await read_single_image(payload, "profilePhoto")
    return ok(await run_in_threadpool(update_user_profile, user_id, data.sent_fields(), photo))
