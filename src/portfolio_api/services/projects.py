"""Project service: article-style project write-ups with images and skill tags.

Slugs are unique across every user. The friendly pre-check below only picks
the error message; the unique index on ``projects.slug`` is what actually
rejects duplicates when two requests race.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TypedDict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from portfolio_api.data.db import get_session
from portfolio_api.data.models import Project, ProjectSkill
from portfolio_api.errors import ConflictError, NotFoundError
from portfolio_api.services.auth import require_user
from portfolio_api.services.images import ImageUpload
from portfolio_api.services.ownership import get_owned_or_404, get_user_by_username_or_404
from portfolio_api.services.skill_tags import replace_skill_tags, tagged_skills
from portfolio_api.services.storage import upload_file

logger = logging.getLogger(__name__)

__all__ = [
    "ProjectData",
    "list_projects",
    "list_projects_for_username",
    "get_project_by_slug",
    "get_project_for_username",
    "create_project",
    "update_project",
    "delete_project",
]

PROJECT_FOLDER = "projects"
IMAGE_PLACEHOLDER = "{{{{IMAGE_{index}}}}}"
_SLUG_TAKEN = "Slug already in use"

_PROJECT_FIELDS = (
    "title",
    "slug",
    "description",
    "content",
    "published",
    "highlighted",
    "published_at",
)


class ProjectData(TypedDict, total=False):
    title: str
    slug: str
    description: str
    content: str
    cover_image: str | None
    content_images: list[str] | None
    published: bool
    highlighted: bool
    published_at: datetime | None
    skill_ids: list[str]


def _project_to_dict(project: Project) -> dict:
    return {
        "id": project.id,
        "user_id": project.user_id,
        "title": project.title,
        "slug": project.slug,
        "description": project.description,
        "content": project.content,
        "cover_image": project.cover_image,
        "content_images": list(project.content_images or []),
        "published": project.published,
        "highlighted": project.highlighted,
        "published_at": project.published_at,
        "created_at": project.created_at,
        "updated_at": project.updated_at,
        "skills": tagged_skills(project),
    }


def _query_with_skills(session: Session):
    return session.query(Project).options(
        selectinload(Project.skill_links).selectinload(ProjectSkill.skill)
    )


def _ensure_slug_available(session: Session, slug: str, exclude_id: str | None = None) -> None:
    query = session.query(Project.id).filter(Project.slug == slug)
    if exclude_id is not None:
        query = query.filter(Project.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(_SLUG_TAKEN)


def embed_content_images(content: str, urls: Sequence[str]) -> str:
    """Replace ``{{IMAGE_<i>}}`` placeholders with the i-th uploaded URL."""
    for index, url in enumerate(urls):
        content = content.replace(IMAGE_PLACEHOLDER.format(index=index), url)
    return content


def _upload_images(
    username: str, cover: ImageUpload | None, content_images: Sequence[ImageUpload]
) -> tuple[str | None, list[str]]:
    cover_url = None
    if cover is not None:
        cover_url = upload_file(cover.data, cover.filename, username, PROJECT_FOLDER).url
    content_urls = [
        upload_file(image.data, image.filename, username, PROJECT_FOLDER).url
        for image in content_images
    ]
    return cover_url, content_urls


def _apply_images(
    project: Project,
    project_data: ProjectData,
    cover_url: str | None,
    content_urls: Sequence[str],
) -> None:
    """Fields without a new upload keep their URL or take the one given."""
    if cover_url:
        project.cover_image = cover_url
    elif project_data.get("cover_image"):
        project.cover_image = project_data["cover_image"]

    if content_urls:
        project.content_images = list(content_urls)
        project.content = embed_content_images(project.content, content_urls)
    elif project_data.get("content_images") is not None:
        project.content_images = list(project_data["content_images"])



def _apply_updates(project: Project, project_data: ProjectData) -> None:
    for field in _PROJECT_FIELDS:
        if field in project_data:
            setattr(project, field, project_data[field])


def list_projects(user_id: str | None) -> list[dict]:
    if not user_id:
        return []
    with get_session() as session:
        projects = (
            _query_with_skills(session)
            .filter(Project.user_id == user_id)
            .order_by(Project.created_at.desc(), Project.id)
            .all()
        )
        return [_project_to_dict(p) for p in projects]


def list_projects_for_username(username: str) -> list[dict]:
    with get_session() as session:
        user = get_user_by_username_or_404(session, username)
        projects = (
            _query_with_skills(session)
            .filter(Project.user_id == user.id)
            .order_by(Project.created_at.desc(), Project.id)
            .all()
        )
        return [_project_to_dict(p) for p in projects]


def get_project_by_slug(user_id: str | None, slug: str) -> dict:
    """Return the caller's project with ``slug``."""
    if not user_id:
        raise NotFoundError("Project not found")
    with get_session() as session:
        project = (
            _query_with_skills(session)
            .filter(Project.slug == slug, Project.user_id == user_id)
            .first()
        )
        if project is None:
            raise NotFoundError("Project not found")
        return _project_to_dict(project)


def get_project_for_username(username: str, slug: str) -> dict:
    with get_session() as session:
        user = get_user_by_username_or_404(session, username)
        project = (
            _query_with_skills(session)
            .filter(Project.slug == slug, Project.user_id == user.id)
            .first()
        )
        if project is None:
            raise NotFoundError("Project not found")
        return _project_to_dict(project)


def create_project(
    user_id: str,
    project_data: ProjectData,
    cover: ImageUpload | None = None,
    content_images: Sequence[ImageUpload] = (),
) -> dict:
    """Create a project, uploading its cover and content images first."""
    with get_session() as session:
        username = require_user(session, user_id).username
        _ensure_slug_available(session, project_data["slug"])

    cover_url, content_urls = _upload_images(username, cover, content_images)

    try:
        with get_session() as session:
            user = require_user(session, user_id)
            project = Project(user_id=user.id, content_images=[])
            _apply_updates(project, project_data)
            _apply_images(project, project_data, cover_url, content_urls)
            session.add(project)
            session.flush()

            replace_skill_tags(session, ProjectSkill, project, project_data.get("skill_ids"))
            result = _project_to_dict(project)
    except IntegrityError as exc:
        raise ConflictError(_SLUG_TAKEN) from exc

    logger.info("Created project %s", result["slug"])
    return result


def update_project(
    user_id: str,
    project_id: str,
    project_data: ProjectData,
    cover: ImageUpload | None = None,
    content_images: Sequence[ImageUpload] = (),
) -> dict:
    """Overwrite a project's fields, images supplied, and tag set.

    Images are uploaded before the project row is locked.
    """
    with get_session() as session:
        project = get_owned_or_404(session, Project, user_id, project_id, "Project")
        _ensure_slug_available(session, project_data["slug"], exclude_id=project.id)
        username = require_user(session, user_id).username

    cover_url, content_urls = _upload_images(username, cover, content_images)

    try:
        with get_session() as session:
            project = get_owned_or_404(
                session, Project, user_id, project_id, "Project", for_update=True
            )
            _apply_updates(project, project_data)
            _apply_images(project, project_data, cover_url, content_urls)
            project.updated_at = datetime.now(UTC)
            session.flush()

            replace_skill_tags(session, ProjectSkill, project, project_data.get("skill_ids"))
            result = _project_to_dict(project)
    except IntegrityError as exc:
        raise ConflictError(_SLUG_TAKEN) from exc

    return result



def delete_project(user_id: str, project_id: str) -> None:
    with get_session() as session:
        project = get_owned_or_404(session, Project, user_id, project_id, "Project")
        session.delete(project)
    logger.info("Deleted project %s", project_id)
