"""Experience service for managing a user's work history.

Entries are tagged with skills; every write replaces the whole tag set and
returns the entry with its skills embedded.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TypedDict

from sqlalchemy.orm import Session, selectinload

from portfolio_api.data.db import get_session
from portfolio_api.data.models import Experience, ExperienceSkill
from portfolio_api.services.auth import require_user
from portfolio_api.services.ownership import get_owned_or_404, get_user_by_username_or_404
from portfolio_api.services.skill_tags import replace_skill_tags, tagged_skills

__all__ = [
    "ExperienceData",
    "list_experiences",
    "list_experiences_for_username",
    "get_experience",
    "create_experience",
    "update_experience",
    "delete_experience",
]

# Fields that can be written on Experience
_EXPERIENCE_FIELDS = (
    "start_year",
    "end_year",
    "company_name",
    "description",
    "location",
)


class ExperienceData(TypedDict, total=False):
    """TypedDict for experience data."""

    start_year: int
    end_year: int | None
    company_name: str
    description: str | None
    location: str
    skill_ids: list[str]


def _experience_to_dict(experience: Experience) -> dict:
    return {
        "id": experience.id,
        "user_id": experience.user_id,
        "start_year": experience.start_year,
        "end_year": experience.end_year,
        "company_name": experience.company_name,
        "description": experience.description,
        "location": experience.location,
        "created_at": experience.created_at,
        "updated_at": experience.updated_at,
        "skills": tagged_skills(experience),
    }


def _query_for_user(session: Session, user_id: str):
    return (
        session.query(Experience)
        .options(selectinload(Experience.skill_links).selectinload(ExperienceSkill.skill))
        .filter(Experience.user_id == user_id)
        .order_by(Experience.start_year.desc(), Experience.created_at)
    )


def _apply_updates(experience: Experience, experience_data: ExperienceData) -> None:
    for field in _EXPERIENCE_FIELDS:
        if field in experience_data:
            setattr(experience, field, experience_data[field])


def list_experiences(user_id: str | None) -> list[dict]:
    """Return the caller's experience entries; anonymous callers get none."""
    if not user_id:
        return []
    with get_session() as session:
        return [_experience_to_dict(e) for e in _query_for_user(session, user_id).all()]


def list_experiences_for_username(username: str) -> list[dict]:
    """Return the named user's experience entries, whoever is asking."""
    with get_session() as session:
        user = get_user_by_username_or_404(session, username)
        return [_experience_to_dict(e) for e in _query_for_user(session, user.id).all()]


def get_experience(user_id: str | None, experience_id: str) -> dict:
    with get_session() as session:
        experience = get_owned_or_404(session, Experience, user_id, experience_id, "Experience")
        return _experience_to_dict(experience)


def create_experience(user_id: str, experience_data: ExperienceData) -> dict:
    with get_session() as session:
        user = require_user(session, user_id)
        experience = Experience(user_id=user.id)
        _apply_updates(experience, experience_data)
        session.add(experience)
        session.flush()

        replace_skill_tags(session, ExperienceSkill, experience, experience_data.get("skill_ids"))
        return _experience_to_dict(experience)


def update_experience(user_id: str, experience_id: str, experience_data: ExperienceData) -> dict:
    """Overwrite an entry's fields and replace its tag set."""
    with get_session() as session:
        experience = get_owned_or_404(
            session, Experience, user_id, experience_id, "Experience", for_update=True
        )
        _apply_updates(experience, experience_data)
        experience.updated_at = datetime.now(UTC)
        session.flush()

        replace_skill_tags(session, ExperienceSkill, experience, experience_data.get("skill_ids"))
        return _experience_to_dict(experience)


def delete_experience(user_id: str, experience_id: str) -> None:
    with get_session() as session:
        experience = get_owned_or_404(session, Experience, user_id, experience_id, "Experience")
        session.delete(experience)
