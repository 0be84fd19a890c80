"""Project routes for the API.

Projects are addressed by slug for reads and by id for writes. Create and
update accept ``multipart/form-data`` with an optional ``coverImage`` file and
up to ten ``contentImages`` files, or a JSON body carrying image URLs.
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
from portfolio_api.api.schemas.projects import ProjectRequest, ProjectResponse
from portfolio_api.api.uploads import read_images, read_payload, read_single_image
from portfolio_api.services.images import MAX_PROJECT_CONTENT_IMAGES
from portfolio_api.services.projects import (
    create_project,
    delete_project,
    get_project_by_slug,
    get_project_for_username,
    list_projects,
    list_projects_for_username,
    update_project,
)

router = APIRouter(prefix="/projects", tags=["projects"], responses=ERROR_RESPONSES)

_LIST_FIELDS = ("skillIds", "skill_ids", "contentImages", "content_images")

Username = Annotated[str, Path(description="Username")]
Slug = Annotated[str, Path(description="Project slug")]
ProjectId = Annotated[str, Path(description="Project ID")]


@router.get("", response_model=DataResponse[list[ProjectResponse]])
def list_project_entries(user_id: OptionalUserId) -> dict:
    """List the caller's projects, newest first."""
    return ok(list_projects(user_id))


@router.get("/user/{username}", response_model=DataResponse[list[ProjectResponse]])
def list_user_projects(username: Username) -> dict:
    return ok(list_projects_for_username(username))


@router.get("/user/{username}/{slug}", response_model=DataResponse[ProjectResponse])
def get_user_project(username: Username, slug: Slug) -> dict:
    return ok(get_project_for_username(username, slug))


@router.get("/{slug}", response_model=DataResponse[ProjectResponse])
def get_project_entry(slug: Slug, user_id: OptionalUserId) -> dict:
    """Return one of the caller's projects by slug."""
    return ok(get_project_by_slug(user_id, slug))


@router.post(
    "",
    response_model=DataResponse[ProjectResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_project_entry(request: Request, user_id: CurrentUserId) -> dict:
    async with read_payload(request, _LIST_FIELDS) as payload:
        data = ProjectRequest.model_validate(payload.data)
        cover = await read_single_image(payload, "coverImage")
        content_images = await read_images(payload, "contentImages", MAX_PROJECT_CONTENT_IMAGES)
    result = await run_in_threadpool(
        create_project, user_id, data.sent_fields("skill_ids"), cover, content_images
    )
    return ok(result)


@router.put("/{project_id}", response_model=DataResponse[ProjectResponse])
async def update_project_entry(
    project_id: ProjectId, request: Request, user_id: CurrentUserId
) -> dict:
    """Replace a project's fields; images not re-sent are kept."""
    async with read_payload(request, _LIST_FIELDS) as payload:
        data = ProjectRequest.model_validate(payload.data)
        cover = await read_single_image(payload, "coverImage")
        content_images = await read_images(payload, "contentImages", MAX_PROJECT_CONTENT_IMAGES)
    result = await run_in_threadpool(
        update_project, user_id, project_id, data.sent_fields("skill_ids"), cover, content_images
    )
    return ok(result)


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project_entry(project_id: ProjectId, user_id: CurrentUserId) -> dict:
    delete_project(user_id, project_id)
    return deleted("Project")
