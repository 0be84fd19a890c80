from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

import portfolio_api.data.db as app_db
import portfolio_api.services.storage as storage
from portfolio_api.data.db import init_db

# Smallest byte string that starts like a PNG; storage never decodes it.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

PUBLIC_URL = "https://cdn.example.com"


class FakeS3Client:
    """Records ``put_object`` calls instead of talking to a bucket."""

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, Any]] = {}

    def put_object(self, **kwargs: Any) -> dict[str, Any]:
        self.objects[kwargs["Key"]] = kwargs
        return {"ETag": '"fake"'}


@pytest.fixture(autouse=True)
def api_db(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Use a temporary SQLite DB for API and service test modules."""
    module_stem = request.node.path.stem.lower()
    if "api" not in module_stem and "service" not in module_stem:
        yield
        return
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path.as_posix()}")
    app_db._engine = None
    app_db._SessionLocal = None
    init_db()
    yield
    # Dispose engine to release connections
    app_db.dispose_db()


@pytest.fixture
def fake_storage(monkeypatch: pytest.MonkeyPatch) -> FakeS3Client:
    """Configure R2 settings and swap the S3 client for a recorder."""
    monkeypatch.setenv("R2_ACCOUNT_ID", "account")
    monkeypatch.setenv("R2_ACCESS_KEY_ID", "key")
    monkeypatch.setenv("R2_SECRET_ACCESS_KEY", "secret")
    monkeypatch.setenv("R2_BUCKET_NAME", "portfolio")
    monkeypatch.setenv("R2_PUBLIC_URL", PUBLIC_URL + "/")
    client = FakeS3Client()
    monkeypatch.setattr(storage, "_client", client)
    return client


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    from portfolio_api.api.main import app

    return TestClient(app)


@pytest.fixture
def signup(client: TestClient) -> Callable[..., dict[str, str]]:
    """Return a helper that registers a user and returns bearer headers."""

    def _signup(username: str = "alice", password: str = "secret123") -> dict[str, str]:
        response = client.post(
            "/auth/register",
            json={
                "email": f"{username}@example.com",
                "username": username,
                "password": password,
                "name": username.title(),
            },
        )
        assert response.status_code == 201, response.text
        token = response.json()["data"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _signup

