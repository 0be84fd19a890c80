"""Health check routes."""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Return the current status of the API."""
    return {"status": "ok", "message": "Portfolio API is running"}
