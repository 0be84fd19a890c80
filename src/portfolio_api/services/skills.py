"""Skill service: CRUD for a user's skills and their icons."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TypedDict

from portfolio_api.data.db import get_session
from portfolio_api.data.models import Skill
from portfolio_api.services.auth import require_user
from portfolio_api.services.images import ImageUpload
from portfolio_api.services.ownership import get_owned_or_404
from portfolio_api.services.skill_tags import skill_to_dict
from portfolio_api.services.storage import upload_file

logger = logging.getLogger(__name__)

__all__ = [
    "SkillData",
    "list_skills",
    "get_skill",
    "create_skill",
    "update_skill",
    "delete_skill",
]

SKILL_FOLDER = "skills"


class SkillData(TypedDict, total=False):
    name: str
    icon: str | None


def list_skills(user_id: str | None) -> list[dict]:
    """Return the caller's skills; anonymous callers get an empty list."""
    if not user_id:
        return []
    with get_session() as session:
        skills = (
            session.query(Skill)
            .filter(Skill.user_id == user_id)
            .order_by(Skill.created_at, Skill.id)
            .all()
        )
        return [skill_to_dict(s) for s in skills]


def get_skill(user_id: str | None, skill_id: str) -> dict:
    with get_session() as session:
        return skill_to_dict(get_owned_or_404(session, Skill, user_id, skill_id, "Skill"))


def _owner_username(user_id: str, skill_id: str | None = None) -> str:
    """Resolve the uploader's folder name without holding a row lock."""
    with get_session() as session:
        if skill_id is not None:
            get_owned_or_404(session, Skill, user_id, skill_id, "Skill")
        return require_user(session, user_id).username


def create_skill(user_id: str, skill_data: SkillData, icon: ImageUpload) -> dict:
    """Upload the icon and create the skill."""
    username = _owner_username(user_id)
    uploaded = upload_file(icon.data, icon.filename, username, SKILL_FOLDER)

    with get_session() as session:
        user = require_user(session, user_id)
        skill = Skill(user_id=user.id, name=skill_data["name"], icon=uploaded.url)
        session.add(skill)
        session.flush()
        return skill_to_dict(skill)


def update_skill(
    user_id: str, skill_id: str, skill_data: SkillData, icon: ImageUpload | None = None
) -> dict:
    """Rename a skill and, when a new icon is supplied, replace its icon.

    The icon goes to storage before the row is locked.
    """
    icon_url = skill_data.get("icon")
    if icon is not None:
        username = _owner_username(user_id, skill_id)
        icon_url = upload_file(icon.data, icon.filename, username, SKILL_FOLDER).url

    with get_session() as session:
        skill = get_owned_or_404(session, Skill, user_id, skill_id, "Skill", for_update=True)
        if icon_url:
            skill.icon = icon_url
        skill.name = skill_data["name"]
        skill.updated_at = datetime.now(UTC)
        session.flush()
        return skill_to_dict(skill)


def delete_skill(user_id: str, skill_id: str) -> None:
    """Delete a skill; it disappears from every entry it was tagged on."""
    with get_session() as session:
        skill = get_owned_or_404(session, Skill, user_id, skill_id, "Skill")
        session.delete(skill)
    logger.info("Deleted skill %s", skill_id)
