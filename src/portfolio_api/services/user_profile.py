"""User profile service.

Each user has at most one profile. It is created once with
``create_user_profile`` and edited in place with ``update_user_profile``;
there is no delete.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TypedDict

from sqlalchemy.exc import IntegrityError

from portfolio_api.data.db import get_session
from portfolio_api.data.models import UserProfile
from portfolio_api.errors import AuthenticationRequired, ConflictError, NotFoundError
from portfolio_api.services.auth import require_user
from portfolio_api.services.images import ImageUpload
from portfolio_api.services.ownership import get_user_by_username_or_404
from portfolio_api.services.storage import upload_file

logger = logging.getLogger(__name__)

__all__ = [
    "UserProfileData",
    "get_user_profile",
    "get_user_profile_by_username",
    "create_user_profile",
    "update_user_profile",
]

PROFILE_FOLDER = "users"
_PROFILE_EXISTS = "User details already exist. Use PUT to update."
_PROFILE_MISSING = "User details not found. Use POST to create."

# Fields that can be written on UserProfile
_PROFILE_FIELDS = ("name", "role", "description")


class UserProfileData(TypedDict, total=False):
    """TypedDict for user profile data."""

    name: str
    role: str
    description: str | None
    social_medias: list[str] | None
    profile_photo: str | None


def _profile_to_dict(profile: UserProfile) -> dict:
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "name": profile.name,
        "role": profile.role,
        "description": profile.description,
        "social_medias": list(profile.social_medias or []),
        "profile_photo": profile.profile_photo,
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }


def _apply_updates(
    profile: UserProfile, profile_data: UserProfileData, photo_url: str | None
) -> None:
    # Omitted keys keep their stored values
    for field in _PROFILE_FIELDS:
        if field in profile_data:
            setattr(profile, field, profile_data[field])
    if "social_medias" in profile_data:
        profile.social_medias = list(profile_data["social_medias"] or [])
    # Keep the stored photo unless a new file or URL was supplied
    if photo_url:
        profile.profile_photo = photo_url
    elif profile_data.get("profile_photo"):
        profile.profile_photo = profile_data["profile_photo"]


def _upload_photo(user_id: str, photo: ImageUpload | None) -> str | None:
    if photo is None:
        return None
    with get_session() as session:
        username = require_user(session, user_id).username
    return upload_file(photo.data, photo.filename, username, PROFILE_FOLDER).url



def get_user_profile(user_id: str | None) -> dict:
    """Get the caller's profile.

    Raises:
        AuthenticationRequired: For anonymous callers
        NotFoundError: If the caller has no profile yet
    """
    if not user_id:
        raise AuthenticationRequired()
    with get_session() as session:
        profile = session.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        if profile is None:
            raise NotFoundError("User details not found")
        return _profile_to_dict(profile)


def get_user_profile_by_username(username: str) -> dict:
    """Get the named user's profile; available to anyone."""
    with get_session() as session:
        user = get_user_by_username_or_404(session, username)
        if user.profile is None:
            raise NotFoundError("User details not found")
        return _profile_to_dict(user.profile)


def create_user_profile(
    user_id: str, profile_data: UserProfileData, photo: ImageUpload | None = None
) -> dict:
    """Create the caller's profile, uploading the photo if one was sent.

    Raises:
        ConflictError: If the caller already has a profile
    """
    with get_session() as session:
        user = require_user(session, user_id)
        existing = session.query(UserProfile.id).filter(UserProfile.user_id == user.id)
        if existing.first() is not None:
            raise ConflictError(_PROFILE_EXISTS)

    photo_url = _upload_photo(user_id, photo)

    try:
        with get_session() as session:
            user = require_user(session, user_id)
            profile = UserProfile(user_id=user.id)
            _apply_updates(profile, profile_data, photo_url)
            session.add(profile)
            session.flush()
            result = _profile_to_dict(profile)
    except IntegrityError as exc:
        raise ConflictError(_PROFILE_EXISTS) from exc

    logger.info("Created profile for user %s", user_id)
    return result


def update_user_profile(
    user_id: str, profile_data: UserProfileData, photo: ImageUpload | None = None
) -> dict:
    """Update the caller's profile in place.

    A new photo is uploaded before the profile row is locked.

    Raises:
        NotFoundError: If the caller has no profile yet
    """
    with get_session() as session:
        user = require_user(session, user_id)
        if user.profile is None:
            raise NotFoundError(_PROFILE_MISSING)

    photo_url = _upload_photo(user_id, photo)

    with get_session() as session:
        profile = (
            session.query(UserProfile)
            .filter(UserProfile.user_id == user_id)
            .with_for_update()
            .first()
        )
        if profile is None:
            raise NotFoundError(_PROFILE_MISSING)

        _apply_updates(profile, profile_data, photo_url)
        profile.updated_at = datetime.now(UTC)
        session.flush()
        return _profile_to_dict(profile)
