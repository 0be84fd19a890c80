"""Education service for managing a user's educational history.

Education entries carry no skill tags.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TypedDict

from portfolio_api.data.db import get_session
from portfolio_api.data.models import Education
from portfolio_api.services.auth import require_user
from portfolio_api.services.ownership import get_owned_or_404, get_user_by_username_or_404

__all__ = [
    "EducationData",
    "list_educations",
    "list_educations_for_username",
    "get_education",
    "create_education",
    "update_education",
    "delete_education",
]

_EDUCATION_FIELDS = ("year", "institution_name", "description")


class EducationData(TypedDict, total=False):
    """TypedDict for education data."""

    year: str
    institution_name: str
    description: str | None


def _education_to_dict(education: Education) -> dict:
    """Convert an Education model to a dictionary.

    Args:
        education: Education model instance

    Returns:
        Dictionary with education data
    """
    return {
        "id": education.id,
        "user_id": education.user_id,
        "year": education.year,
        "institution_name": education.institution_name,
        "description": education.description,
        "created_at": education.created_at,
        "updated_at": education.updated_at,
    }


def _apply_updates(education: Education, education_data: EducationData) -> None:
    for field in _EDUCATION_FIELDS:
        if field in education_data:
            setattr(education, field, education_data[field])


def _list_for_user_id(user_id: str) -> list[dict]:
    with get_session() as session:
        entries = (
            session.query(Education)
            .filter(Education.user_id == user_id)
            .order_by(Education.created_at, Education.id)
            .all()
        )
        return [_education_to_dict(e) for e in entries]


def list_educations(user_id: str | None) -> list[dict]:
    """Get all education entries of the caller.

    Args:
        user_id: Caller's id, or None for anonymous requests

    Returns:
        List of education dictionaries (always empty for anonymous callers)
    """
    if not user_id:
        return []
    return _list_for_user_id(user_id)


def list_educations_for_username(username: str) -> list[dict]:
    """Get all education entries of the named user.

    Raises:
        NotFoundError: If no user has that username
    """
    with get_session() as session:
        user_id = get_user_by_username_or_404(session, username).id
    return _list_for_user_id(user_id)


def get_education(user_id: str | None, education_id: str) -> dict:
    with get_session() as session:
        education = get_owned_or_404(session, Education, user_id, education_id, "Education")
        return _education_to_dict(education)


def create_education(user_id: str, education_data: EducationData) -> dict:
    with get_session() as session:
        user = require_user(session, user_id)
        education = Education(user_id=user.id)
        _apply_updates(education, education_data)
        session.add(education)
        session.flush()
        return _education_to_dict(education)


def update_education(user_id: str, education_id: str, education_data: EducationData) -> dict:
    with get_session() as session:
        education = get_owned_or_404(
            session, Education, user_id, education_id, "Education", for_update=True
        )
        _apply_updates(education, education_data)
        education.updated_at = datetime.now(UTC)
        session.flush()
        return _education_to_dict(education)


def delete_education(user_id: str, education_id: str) -> None:
    with get_session() as session:
        education = get_owned_or_404(session, Education, user_id, education_id, "Education")
        session.delete(education)
