"""Deleting an account removes everything the account owns."""

from __future__ import annotations

from collections.abc import Callable

from conftest import PNG_BYTES, FakeS3Client
from fastapi.testclient import TestClient

from portfolio_api.data.db import get_session
from portfolio_api.data.models import (
    Certification,
    CertificationSkill,
    Education,
    Experience,
    ExperienceSkill,
    Project,
    ProjectSkill,
    Skill,
    UserProfile,
)

OWNED_MODELS = (
    UserProfile,
    Skill,
    Experience,
    ExperienceSkill,
    Education,
    Certification,
    CertificationSkill,
    Project,
    ProjectSkill,
)


def _counts() -> dict[str, int]:
    with get_session() as session:
        return {model.__name__: session.query(model).count() for model in OWNED_MODELS}


def _populate(client: TestClient, headers: dict[str, str], slug: str) -> None:
    client.post("/user", data={"name": "Alice", "role": "Engineer"}, headers=headers)
    skill_id = client.post(
        "/skills",
        data={"name": "Go"},
        files={"icon": ("go.png", PNG_BYTES, "image/png")},
        headers=headers,
    ).json()["data"]["id"]
    client.post(
        "/experience",
        json={
            "startYear": 2020,
            "companyName": "Acme",
            "location": "Remote",
            "skillIds": [skill_id],
        },
        headers=headers,
    )
    client.post("/education", json={"year": "2019", "institutionName": "Uni"}, headers=headers)
    client.post(
        "/certifications",
        json={
            "name": "CKA",
            "issuingOrganization": "CNCF",
            "year": 2023,
            "skillIds": [skill_id],
        },
        headers=headers,
    )
    client.post(
        "/projects",
        json={
            "title": "Site",
            "slug": slug,
            "description": "d",
            "content": "c",
            "skillIds": [skill_id],
        },
        headers=headers,
    )


def test_user_delete_cascades(
    client: TestClient, signup: Callable[..., dict[str, str]], fake_storage: FakeS3Client
) -> None:
    alice = signup("alice")
    bob = signup("bob")
    _populate(client, alice, "alice-site")
    _populate(client, bob, "bob-site")
    assert all(count == 2 for count in _counts().values()), _counts()

    response = client.delete("/auth/me", headers=alice)

    assert response.status_code == 200
    assert all(count == 1 for count in _counts().values()), _counts()
    assert client.get("/experience/user/alice").status_code == 404
    assert client.get("/projects/user/alice").status_code == 404
    assert client.get("/auth/me", headers=bob).status_code == 200
