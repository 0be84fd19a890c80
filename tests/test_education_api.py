"""Tests for education API endpoints."""

from __future__ import annotations

from collections.abc import Callable

from fastapi.testclient import TestClient

EDUCATION = {
    "year": "2016-2020",
    "institutionName": "State University",
    "description": "BSc Computer Science",
}


def test_create_list_and_get(client: TestClient, signup: Callable[..., dict[str, str]]) -> None:
    alice = signup("alice")

    created = client.post("/education", json=EDUCATION, headers=alice)

    assert created.status_code == 201
    data = created.json()["data"]
    assert data["institutionName"] == "State University"
    assert "skills" not in data
    assert client.get("/education", headers=alice).json()["data"] == [data]
    assert client.get(f"/education/{data['id']}", headers=alice).json()["data"] == data


def test_snake_case_body_is_accepted(
    client: TestClient, signup: Callable[..., dict[str, str]]
) -> None:
    response = client.post(
        "/education",
        json={"year": "2020", "institution_name": "College"},
        headers=signup(),
    )

    assert response.status_code == 201
    assert response.json()["data"]["institutionName"] == "College"


def test_validation(client: TestClient, signup: Callable[..., dict[str, str]]) -> None:
    response = client.post(
        "/education", json={"year": "", "institutionName": ""}, headers=signup()
    )

    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert fields == {"year", "institutionName"}


def test_update_and_delete(client: TestClient, signup: Callable[..., dict[str, str]]) -> None:
    alice = signup("alice")
    created = client.post("/education", json=EDUCATION, headers=alice).json()["data"]

    updated = client.put(
        f"/education/{created['id']}",
        json={**EDUCATION, "institutionName": "Tech Institute", "description": None},
        headers=alice,
    )

    assert updated.status_code == 200
    assert updated.json()["data"]["institutionName"] == "Tech Institute"
    assert updated.json()["data"]["description"] is None

    deleted = client.delete(f"/education/{created['id']}", headers=alice)
    assert deleted.json()["message"] == "Education deleted successfully"
    assert client.get("/education", headers=alice).json()["data"] == []


def test_update_without_description_keeps_it(
    client: TestClient, signup: Callable[..., dict[str, str]]
) -> None:
    alice = signup("alice")
    created = client.post("/education", json=EDUCATION, headers=alice).json()["data"]

    updated = client.put(
        f"/education/{created['id']}",
        json={"year": "2016-2021", "institutionName": "State University"},
        headers=alice,
    )

    assert updated.status_code == 200
    assert updated.json()["data"]["year"] == "2016-2021"
    assert updated.json()["data"]["description"] == "BSc Computer Science"


def test_ownership_and_anonymous_views(
    client: TestClient, signup: Callable[..., dict[str, str]]
) -> None:
    alice = signup("alice")
    bob = signup("bob")
    created = client.post("/education", json=EDUCATION, headers=alice).json()["data"]
    path = f"/education/{created['id']}"

    assert client.get(path, headers=bob).status_code == 404
    assert client.put(path, json=EDUCATION, headers=bob).status_code == 404
    assert client.delete(path, headers=bob).status_code == 404
    assert client.get(path).status_code == 404
    assert client.get("/education").json()["data"] == []

    public = client.get("/education/user/alice").json()["data"]
    assert [e["id"] for e in public] == [created["id"]]
