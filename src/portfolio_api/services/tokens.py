"""Bearer token issuing and verification (HS256 JWTs)."""

from __future__ import annotations

from datetime import UTC, datetime

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from portfolio_api.config import get_jwt_expires_in, get_jwt_secret

JWT_ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with, or expired."""


def create_access_token(user_id: str) -> str:
    """Return a signed token carrying ``user_id`` as its subject."""
    expire = datetime.now(UTC) + get_jwt_expires_in()
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the user id carried by ``token``.

    Raises:
        InvalidTokenError: If the signature does not verify, the token has
            expired, or it carries no subject.
    """
    try:
        payload = jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expired") from exc
    except JWTError as exc:
        raise InvalidTokenError("Invalid token") from exc

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError("Invalid token payload")
    return str(user_id)
