"""Request middleware that identifies the caller from a bearer token."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from portfolio_api.services.tokens import InvalidTokenError, decode_access_token

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


def resolve_user_id(authorization: str | None) -> str | None:
    """Return the user id carried by an ``Authorization`` header value.

    Missing, malformed, expired or forged tokens all resolve to None.
    """
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX) :].strip()
    if not token:
        return None
    try:
        return decode_access_token(token)
    except InvalidTokenError:
        logger.debug("Ignoring invalid bearer token")
        return None


async def authenticate(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Attach ``request.state.user_id``; never rejects the request itself."""
    request.state.user_id = resolve_user_id(request.headers.get("Authorization"))
    return await call_next(request)
