"""Skill tagging for experience, certification and project entries.

A parent's tag set is replaced wholesale: every junction row for the parent is
deleted, then one row is inserted per distinct requested skill. Both steps run
in the caller's session, so they commit or roll back together with the
parent's own changes.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from portfolio_api.data.models import (
    CertificationSkill,
    ExperienceSkill,
    ProjectSkill,
    Skill,
)
from portfolio_api.errors import ValidationError

# Junction model -> name of its parent foreign key column
_PARENT_COLUMNS = {
    ExperienceSkill: "experience_id",
    CertificationSkill: "certification_id",
    ProjectSkill: "project_id",
}


def _unique_ids(skill_ids: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for skill_id in skill_ids:
        seen.setdefault(str(skill_id), None)
    return list(seen)


def _ensure_skills_exist(session: Session, skill_ids: Sequence[str]) -> None:
    # Ownership of the skills is not checked here; only existence.
    found = {row.id for row in session.query(Skill.id).filter(Skill.id.in_(skill_ids)).all()}
    missing = [skill_id for skill_id in skill_ids if skill_id not in found]
    if missing:
        raise ValidationError(
            "Unknown skill ids",
            details=[
                {"field": "skillIds", "message": f"Skill {skill_id} does not exist"}
                for skill_id in missing
            ],
        )


def replace_skill_tags(
    session: Session,
    link_model: type[ExperienceSkill] | type[CertificationSkill] | type[ProjectSkill],
    parent,
    skill_ids: Iterable[str] | None,
) -> None:
    """Set the parent's tag set to exactly ``skill_ids``.

    ``None`` or an empty iterable clears every tag.
    """
    parent_column = _PARENT_COLUMNS[link_model]
    wanted = _unique_ids(skill_ids or [])
    if wanted:
        _ensure_skills_exist(session, wanted)

    session.query(link_model).filter(
        getattr(link_model, parent_column) == parent.id
    ).delete(synchronize_session=False)
    session.flush()

    for skill_id in wanted:
        session.add(link_model(**{parent_column: parent.id, "skill_id": skill_id}))
    session.flush()

    # Drop the cached collection so the re-read sees the new rows.
    session.expire(parent, ["skill_links"])


def tagged_skills(parent) -> list[dict]:
    """Return the skills tagged onto ``parent``, ordered by name."""
    skills = [link.skill for link in parent.skill_links]
    return [skill_to_dict(skill) for skill in sorted(skills, key=lambda s: (s.name, s.id))]


def skill_to_dict(skill: Skill) -> dict:
    return {
        "id": skill.id,
        "user_id": skill.user_id,
        "name": skill.name,
        "icon": skill.icon,
        "created_at": skill.created_at,
        "updated_at": skill.updated_at,
    }
