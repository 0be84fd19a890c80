"""UserProfile model for the public "about me" record.

It has a 1:1 relationship with the User model.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_api.data.db import Base

if TYPE_CHECKING:
    from portfolio_api.data.models.user import User


class UserProfile(Base):
    """Profile shown on the portfolio landing page.

    Attributes:
        id: Generated UUID primary key.
        user_id: Foreign key to users table (unique, 1:1 relationship).
        name: Name shown on the profile.
        role: Headline role, e.g. "Backend Engineer".
        description: Free-text biography.
        social_medias: JSON list of social media links.
        profile_photo: Public URL of the uploaded photo.
    """

    __tablename__ = "user_details"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    social_medias: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    profile_photo: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user: Mapped[User] = relationship("User", back_populates="profile")
