"""Test suite for skill tag replacement."""

from __future__ import annotations

import pytest

from portfolio_api.data.db import get_session
from portfolio_api.data.models import Experience, ExperienceSkill, Skill, User
from portfolio_api.errors import ValidationError
from portfolio_api.services.skill_tags import replace_skill_tags, tagged_skills


@pytest.fixture
def owner(api_db: None) -> dict[str, str]:
    """Create a user with two skills and an experience entry."""
    with get_session() as session:
        user = User(email="a@example.com", username="alice", password_hash="x", name="Alice")
        session.add(user)
        session.flush()
        rust = Skill(user_id=user.id, name="Rust", icon="https://cdn/rust.png")
        go = Skill(user_id=user.id, name="Go", icon="https://cdn/go.png")
        experience = Experience(
            user_id=user.id, start_year=2020, company_name="Acme", location="Remote"
        )
        session.add_all([rust, go, experience])
        session.flush()
        return {"go": go.id, "rust": rust.id, "experience": experience.id}


def _tag_ids(experience_id: str) -> set[str]:
    with get_session() as session:
        rows = session.query(ExperienceSkill).filter_by(experience_id=experience_id).all()
        return {row.skill_id for row in rows}


def _replace(experience_id: str, skill_ids: list[str] | None) -> list[dict]:
    with get_session() as session:
        experience = session.get(Experience, experience_id)
        replace_skill_tags(session, ExperienceSkill, experience, skill_ids)
        return tagged_skills(experience)


def test_replace_sets_exact_tag_set(owner: dict[str, str]) -> None:
    skills = _replace(owner["experience"], [owner["rust"], owner["go"]])

    assert [s["name"] for s in skills] == ["Go", "Rust"]
    assert _tag_ids(owner["experience"]) == {owner["go"], owner["rust"]}

    _replace(owner["experience"], [owner["go"]])
    assert _tag_ids(owner["experience"]) == {owner["go"]}


def test_none_and_empty_clear_tags(owner: dict[str, str]) -> None:
    _replace(owner["experience"], [owner["go"]])
    assert _replace(owner["experience"], []) == []

    _replace(owner["experience"], [owner["go"]])
    assert _replace(owner["experience"], None) == []
    assert _tag_ids(owner["experience"]) == set()


def test_unknown_skill_rolls_back_everything(owner: dict[str, str]) -> None:
    _replace(owner["experience"], [owner["go"]])

    with pytest.raises(ValidationError) as excinfo:
        _replace(owner["experience"], [owner["rust"], "00000000-0000-0000-0000-000000000000"])

    assert excinfo.value.details[0]["field"] == "skillIds"
    assert _tag_ids(owner["experience"]) == {owner["go"]}
