"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from portfolio_api.errors import AuthenticationRequired


def get_optional_user_id(request: Request) -> str | None:
    """Get the caller's user id if a valid bearer token was sent.

    The ``authenticate`` middleware has already decoded the token. Read
    endpoints use this to serve anonymous callers (empty lists, 404s).

    Returns:
        str | None: Authenticated user id, or None for anonymous access.
    """
    return getattr(request.state, "user_id", None)


def require_user_id(
    user_id: Annotated[str | None, Depends(get_optional_user_id)],
) -> str:
    """Get the caller's user id, rejecting anonymous requests.

    Raises:
        AuthenticationRequired: If no valid token was sent (401).
    """
    if not user_id:
        raise AuthenticationRequired()
    return user_id


OptionalUserId = Annotated[str | None, Depends(get_optional_user_id)]
CurrentUserId = Annotated[str, Depends(require_user_id)]
