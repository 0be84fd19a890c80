"""Certification service: CRUD plus skill tagging."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TypedDict

from sqlalchemy.orm import selectinload

from portfolio_api.data.db import get_session
from portfolio_api.data.models import Certification, CertificationSkill
from portfolio_api.services.auth import require_user
from portfolio_api.services.ownership import get_owned_or_404
from portfolio_api.services.skill_tags import replace_skill_tags, tagged_skills

__all__ = [
    "CertificationData",
    "list_certifications",
    "get_certification",
    "create_certification",
    "update_certification",
    "delete_certification",
]

_CERTIFICATION_FIELDS = (
    "name",
    "issuing_organization",
    "year",
    "description",
    "certificate_link",
)


class CertificationData(TypedDict, total=False):
    name: str
    issuing_organization: str
    year: int
    description: str | None
    certificate_link: str | None
    skill_ids: list[str]


def _certification_to_dict(certification: Certification) -> dict:
    return {
        "id": certification.id,
        "user_id": certification.user_id,
        "name": certification.name,
        "issuing_organization": certification.issuing_organization,
        "year": certification.year,
        "description": certification.description,
        "certificate_link": certification.certificate_link,
        "created_at": certification.created_at,
        "updated_at": certification.updated_at,
        "skills": tagged_skills(certification),
    }


def _apply_updates(certification: Certification, certification_data: CertificationData) -> None:
    for field in _CERTIFICATION_FIELDS:
        if field in certification_data:
            setattr(certification, field, certification_data[field])


def list_certifications(user_id: str | None) -> list[dict]:
    if not user_id:
        return []
    with get_session() as session:
        certifications = (
            session.query(Certification)
            .options(
                selectinload(Certification.skill_links).selectinload(CertificationSkill.skill)
            )
            .filter(Certification.user_id == user_id)
            .order_by(Certification.year.desc(), Certification.created_at)
            .all()
        )
        return [_certification_to_dict(c) for c in certifications]


def get_certification(user_id: str | None, certification_id: str) -> dict:
    with get_session() as session:
        certification = get_owned_or_404(
            session, Certification, user_id, certification_id, "Certification"
        )
        return _certification_to_dict(certification)


def create_certification(user_id: str, certification_data: CertificationData) -> dict:
    with get_session() as session:
        user = require_user(session, user_id)
        certification = Certification(user_id=user.id)
        _apply_updates(certification, certification_data)
        session.add(certification)
        session.flush()

        replace_skill_tags(
            session, CertificationSkill, certification, certification_data.get("skill_ids")
        )
        return _certification_to_dict(certification)


def update_certification(
    user_id: str, certification_id: str, certification_data: CertificationData
) -> dict:
    with get_session() as session:
        certification = get_owned_or_404(
            session, Certification, user_id, certification_id, "Certification", for_update=True
        )
        _apply_updates(certification, certification_data)
        certification.updated_at = datetime.now(UTC)
        session.flush()

        replace_skill_tags(
            session, CertificationSkill, certification, certification_data.get("skill_ids")
        )
        return _certification_to_dict(certification)


def delete_certification(user_id: str, certification_id: str) -> None:
    with get_session() as session:
        certification = get_owned_or_404(
            session, Certification, user_id, certification_id, "Certification"
        )
        session.delete(certification)
