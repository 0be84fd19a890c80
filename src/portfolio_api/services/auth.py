"""Account registration, login and lookup.

Passwords are stored as salted PBKDF2 hashes, never in plaintext.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import os

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portfolio_api.data.db import get_session
from portfolio_api.data.models import User
from portfolio_api.errors import AuthenticationRequired, ConflictError, NotFoundError
from portfolio_api.services.tokens import create_access_token

logger = logging.getLogger(__name__)

__all__ = [
    "hash_password",
    "verify_password",
    "register_user",
    "authenticate_user",
    "get_user",
    "delete_user",
    "require_user",
]

_PBKDF2_ITERATIONS = 100_000
_SALT_BYTES = 16
_INVALID_CREDENTIALS = "Invalid credentials"


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)


def hash_password(password: str) -> str:
    """Hash an account password for the ``users.password`` column.

    Each call draws a fresh salt, so two accounts with the same password
    never share a stored value. Format: ``<salt hex>:<digest hex>``.
    """
    salt = os.urandom(_SALT_BYTES)
    return f"{salt.hex()}:{_derive(password, salt).hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a login attempt against the column value written by ``hash_password``.

    A malformed stored value counts as a mismatch.
    """
    salt_hex, sep, digest_hex = stored_hash.partition(":")
    if not sep:
        return False
    try:
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        return False
    return hmac.compare_digest(_derive(password, salt), expected)



def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "username": user.username,
        "name": user.name,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def require_user(session: Session, user_id: str) -> User:
    """Load the caller's account, treating a vanished account as unauthenticated."""
    user = session.get(User, user_id)
    if user is None:
        raise AuthenticationRequired("User not found")
    return user


def register_user(email: str, username: str, password: str, name: str) -> tuple[dict, str]:
    """Create a new account and issue a token for it.

    Returns:
        Tuple of (user dictionary, bearer token).

    Raises:
        ConflictError: If the email or username is already in use.
    """
    # The unique constraints are the real guard; these lookups only pick the message.
    with get_session() as session:
        if session.query(User.id).filter(User.email == email).first() is not None:
            raise ConflictError("Email already registered")
        if session.query(User.id).filter(User.username == username).first() is not None:
            raise ConflictError("Username already taken")

    try:
        with get_session() as session:
            user = User(
                email=email,
                username=username,
                password_hash=hash_password(password),
                name=name,
            )
            session.add(user)
            session.flush()
            result = user_to_dict(user)
    except IntegrityError as exc:
        raise ConflictError("Email or username already registered") from exc

    logger.info("Registered user %s", username)
    return result, create_access_token(result["id"])


def authenticate_user(email: str, password: str) -> tuple[dict, str]:
    """Check credentials and issue a token.

    Unknown emails and wrong passwords fail with the same message.

    Raises:
        AuthenticationRequired: If the credentials do not match an account.
    """
    with get_session() as session:
        user = session.query(User).filter(User.email == email).first()
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Rejected login attempt")
            raise AuthenticationRequired(_INVALID_CREDENTIALS)
        result = user_to_dict(user)

    return result, create_access_token(result["id"])


def get_user(user_id: str) -> dict:
    with get_session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user_to_dict(user)


def delete_user(user_id: str) -> None:
    """Delete an account together with everything it owns."""
    with get_session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        session.delete(user)
    logger.info("Deleted user %s", user_id)
