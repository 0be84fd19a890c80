"""Skill routes for the API.

Create and update take ``multipart/form-data`` so the icon can be uploaded
alongside the name.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, Request, status
from fastapi.concurrency import run_in_threadpool

from portfolio_api.api.dependencies import CurrentUserId, OptionalUserId
from portfolio_api.api.schemas.common import (
    ERROR_RESPONSES,
    DataResponse,
    MessageResponse,
    deleted,
    ok,
)
from portfolio_api.api.schemas.skills import SkillRequest, SkillResponse
from portfolio_api.api.uploads import read_payload, read_single_image
from portfolio_api.errors import ValidationError
from portfolio_api.services.skills import (
    create_skill,
    delete_skill,
    get_skill,
    list_skills,
    update_skill,
)

router = APIRouter(prefix="/skills", tags=["skills"], responses=ERROR_RESPONSES)

SkillId = Annotated[str, Path(description="Skill ID")]


@router.get("", response_model=DataResponse[list[SkillResponse]])
def list_skill_entries(user_id: OptionalUserId) -> dict:
    return ok(list_skills(user_id))


@router.get("/{skill_id}", response_model=DataResponse[SkillResponse])
def get_skill_entry(skill_id: SkillId, user_id: OptionalUserId) -> dict:
    return ok(get_skill(user_id, skill_id))


@router.post(
    "",
    response_model=DataResponse[SkillResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_skill_entry(request: Request, user_id: CurrentUserId) -> dict:
    """Create a skill from a ``name`` field and a required ``icon`` image."""
    async with read_payload(request) as payload:
        data = SkillRequest.model_validate(payload.data)
        icon = await read_single_image(payload, "icon")
    if icon is None:
        raise ValidationError(
            "Icon file is required",
            details=[{"field": "icon", "message": "Icon file is required"}],
        )
    return ok(await run_in_threadpool(create_skill, user_id, data.sent_fields(), icon))


@router.put("/{skill_id}", response_model=DataResponse[SkillResponse])
async def update_skill_entry(skill_id: SkillId, request: Request, user_id: CurrentUserId) -> dict:
    """Rename a skill; a new ``icon`` file replaces the stored icon."""
    async with read_payload(request) as payload:
        data = SkillRequest.model_validate(payload.data)
        icon = await read_single_image(payload, "icon")
    return ok(await run_in_threadpool(update_skill, user_id, skill_id, data.sent_fields(), icon))


@router.delete("/{skill_id}", response_model=MessageResponse)
def delete_skill_entry(skill_id: SkillId, user_id: CurrentUserId) -> dict:
    """Delete a skill and untag it everywhere."""
    delete_skill(user_id, skill_id)
    return deleted("Skill")
