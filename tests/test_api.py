"""Tests for the Portfolio API application."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from portfolio_api.api.main import app


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_returns_ok_status(self, client: TestClient) -> None:
        data = client.get("/health").json()
        assert data == {"status": "ok", "message": "Portfolio API is running"}

    def test_health_response_is_json(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.headers["content-type"] == "application/json"


class TestAppConfiguration:
    """Tests for the FastAPI app configuration."""

    def test_app_title(self) -> None:
        assert app.title == "Portfolio API"

    def test_app_version(self) -> None:
        assert app.version == "0.1.0"

    def test_cors_middleware_is_configured(self) -> None:
        middleware_classes = [m.cls.__name__ for m in app.user_middleware]
        assert "CORSMiddleware" in middleware_classes


class TestErrorEnvelope:
    """Every non-2xx response carries ``success: false`` and ``error``."""

    def test_unknown_route_returns_404(self, client: TestClient) -> None:
        response = client.get("/nonexistent")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Route not found"}

    def test_malformed_json_is_validation_error(self, client: TestClient) -> None:
        response = client.post(
            "/auth/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_unexpected_error_is_generic_500(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import portfolio_api.api.routes.auth as auth_routes

        def boom(email: str, password: str) -> None:
            raise RuntimeError("database password is hunter2")

        monkeypatch.setattr(auth_routes, "authenticate_user", boom)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post(
            "/auth/login", json={"email": "alice@example.com", "password": "secret123"}
        )

        assert response.status_code == 500
        body = response.json()
        assert body == {"success": False, "error": "Internal server error"}
        assert "hunter2" not in response.text


class TestDatabaseIsolation:
    """API modules run against a fresh SQLite file per test."""

    def test_engine_points_at_temporary_database(self, tmp_path) -> None:
        import portfolio_api.data.db as app_db

        engine = app_db._get_engine()
        assert engine.url.database == (tmp_path / "api.db").as_posix()
        assert (tmp_path / "api.db").exists()

    def test_registration_does_not_leak_between_tests(self, client: TestClient) -> None:
        for _ in range(2):
            response = client.post(
                "/auth/register",
                json={
                    "name": "Isolated",
                    "username": "isolated",
                    "email": "isolated@example.com",
                    "password": "secret123",
                },
            )
        assert response.status_code == 400

    def test_same_user_registers_again_in_a_new_test(self, client: TestClient) -> None:
        response = client.post(
            "/auth/register",
            json={
                "name": "Isolated",
                "username": "isolated",
                "email": "isolated@example.com",
                "password": "secret123",
            },
        )
        assert response.status_code == 201
