"""Tests for skills API endpoints."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from conftest import PNG_BYTES, PUBLIC_URL, FakeS3Client
from fastapi.testclient import TestClient

import portfolio_api.services.storage as storage
from portfolio_api.services.images import MAX_IMAGE_BYTES


def _icon(name: str = "go.png", content_type: str = "image/png", data: bytes = PNG_BYTES):
    return {"icon": (name, data, content_type)}


@pytest.fixture
def alice(signup: Callable[..., dict[str, str]]) -> dict[str, str]:
    return signup("alice")


def _create_skill(client: TestClient, headers: dict[str, str], name: str = "Go") -> dict:
    response = client.post(
        "/skills", data={"name": name}, files=_icon(f"{name}.png"), headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateSkill:
    def test_create_uploads_icon(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        response = client.post("/skills", data={"name": "Go"}, files=_icon(), headers=alice)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Go"
        assert data["icon"] == f"{PUBLIC_URL}/alice/skills/go.png"
        assert {"id", "userId", "createdAt", "updatedAt"} <= data.keys()
        assert "alice/skills/go.png" in fake_storage.objects

    def test_icon_is_required(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        response = client.post("/skills", data={"name": "Go"}, headers=alice)

        assert response.status_code == 400
        assert response.json()["error"] == "Icon file is required"

    def test_non_image_is_rejected_before_upload(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        response = client.post(
            "/skills",
            data={"name": "Go"},
            files=_icon("notes.txt", "text/plain", b"hello"),
            headers=alice,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Only image files are allowed"
        assert fake_storage.objects == {}

    def test_oversized_icon_is_rejected(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        response = client.post(
            "/skills",
            data={"name": "Go"},
            files=_icon(data=b"\x00" * (MAX_IMAGE_BYTES + 1)),
            headers=alice,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "File too large"

    def test_missing_name_is_reported(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        response = client.post("/skills", files=_icon(), headers=alice)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "name"

    def test_requires_authentication(self, client: TestClient) -> None:
        response = client.post("/skills", data={"name": "Go"}, files=_icon())
        assert response.status_code == 401

    def test_storage_not_configured(
        self, client: TestClient, alice: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("R2_ACCOUNT_ID", raising=False)
        monkeypatch.setattr(storage, "_client", None)

        response = client.post("/skills", data={"name": "Go"}, files=_icon(), headers=alice)

        assert response.status_code == 502
        assert response.json() == {
            "success": False,
            "error": "Object storage is not configured",
        }
        assert client.get("/skills", headers=alice).json()["data"] == []


class TestReadSkills:
    def test_list_returns_only_callers_skills(
        self,
        client: TestClient,
        signup: Callable[..., dict[str, str]],
        fake_storage: FakeS3Client,
    ) -> None:
        alice = signup("alice")
        bob = signup("bob")
        _create_skill(client, alice, "Go")
        _create_skill(client, alice, "Rust")
        _create_skill(client, bob, "Java")

        names = [s["name"] for s in client.get("/skills", headers=alice).json()["data"]]

        assert sorted(names) == ["Go", "Rust"]

    def test_anonymous_list_is_empty(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        _create_skill(client, alice)

        response = client.get("/skills")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    def test_detail_for_owner_only(
        self,
        client: TestClient,
        signup: Callable[..., dict[str, str]],
        fake_storage: FakeS3Client,
    ) -> None:
        alice = signup("alice")
        bob = signup("bob")
        skill = _create_skill(client, alice)

        assert client.get(f"/skills/{skill['id']}", headers=alice).status_code == 200
        for headers in (bob, {}):
            response = client.get(f"/skills/{skill['id']}", headers=headers)
            assert response.status_code == 404
            assert response.json() == {"success": False, "error": "Skill not found"}


class TestUpdateAndDeleteSkill:
    def test_rename_keeps_icon(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        skill = _create_skill(client, alice)

        response = client.put(f"/skills/{skill['id']}", data={"name": "Golang"}, headers=alice)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Golang"
        assert data["icon"] == skill["icon"]

    def test_new_icon_replaces_old(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        skill = _create_skill(client, alice)

        response = client.put(
            f"/skills/{skill['id']}",
            data={"name": "Go"},
            files=_icon("gopher.png"),
            headers=alice,
        )

        assert response.json()["data"]["icon"] == f"{PUBLIC_URL}/alice/skills/gopher.png"

    def test_icon_is_uploaded_before_row_is_locked(
        self,
        client: TestClient,
        alice: dict[str, str],
        fake_storage: FakeS3Client,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        import portfolio_api.services.skills as skill_service

        skill = _create_skill(client, alice)
        events: list[str] = []
        real_lookup = skill_service.get_owned_or_404
        real_put = fake_storage.put_object

        def lookup(*args, **kwargs):
            events.append("lock" if kwargs.get("for_update") else "read")
            return real_lookup(*args, **kwargs)

        def put_object(**kwargs):
            events.append("upload")
            return real_put(**kwargs)

        monkeypatch.setattr(skill_service, "get_owned_or_404", lookup)
        monkeypatch.setattr(fake_storage, "put_object", put_object)

        response = client.put(
            f"/skills/{skill['id']}", data={"name": "Go"}, files=_icon("new.png"), headers=alice
        )

        assert response.status_code == 200
        assert events == ["read", "upload", "lock"]

    def test_foreign_skill_update_uploads_nothing(
        self,
        client: TestClient,
        signup: Callable[..., dict[str, str]],
        fake_storage: FakeS3Client,
    ) -> None:
        alice = signup("alice")
        bob = signup("bob")
        skill = _create_skill(client, alice)

        response = client.put(
            f"/skills/{skill['id']}", data={"name": "Mine"}, files=_icon("x.png"), headers=bob
        )

        assert response.status_code == 404
        assert not any(key.startswith("bob/") for key in fake_storage.objects)

    def test_other_user_cannot_update_or_delete(
        self,
        client: TestClient,
        signup: Callable[..., dict[str, str]],
        fake_storage: FakeS3Client,
    ) -> None:
        alice = signup("alice")
        bob = signup("bob")
        skill = _create_skill(client, alice)

        update = client.put(f"/skills/{skill['id']}", data={"name": "Mine"}, headers=bob)
        delete = client.delete(f"/skills/{skill['id']}", headers=bob)

        assert update.status_code == delete.status_code == 404
        assert "Go" not in update.text
        detail = client.get(f"/skills/{skill['id']}", headers=alice).json()["data"]
        assert detail["name"] == "Go"

    def test_delete(
        self, client: TestClient, alice: dict[str, str], fake_storage: FakeS3Client
    ) -> None:
        skill = _create_skill(client, alice)

        response = client.delete(f"/skills/{skill['id']}", headers=alice)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Skill deleted successfully"}
        assert client.get(f"/skills/{skill['id']}", headers=alice).status_code == 404
