"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``portfolio_api.api.errors`` turns them into
``{"success": false, "error": ...}`` responses with the matching status code.
"""

from __future__ import annotations

from typing import Any


class PortfolioError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PortfolioError):
    """Request input failed validation.

    ``details`` holds one ``{"field": ..., "message": ...}`` entry per violation.
    """

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self, message: str | None = None, details: list[dict[str, Any]] | None = None
    ) -> None:
        super().__init__(message)
        self.details = details or []


class AuthenticationRequired(PortfolioError):
    status_code = 401
    default_message = "Authentication required"


class NotFoundError(PortfolioError):
    """Missing row, or a row owned by somebody else.

    Both cases share this error so other users' resources cannot be discovered.
    """

    status_code = 404
    default_message = "Resource not found"


class ConflictError(PortfolioError):
    """A unique key (email, username, slug, profile) is already taken."""

    status_code = 400
    default_message = "Resource already exists"


class UploadError(PortfolioError):
    status_code = 502
    default_message = "File upload failed"


class InternalError(PortfolioError):
    status_code = 500
    default_message = "Internal server error"
