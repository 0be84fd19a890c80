"""User account model.

The users table is the identity root: every other row is owned by a user and
is removed with it. Passwords are stored as salted PBKDF2 hashes.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_api.data.db import Base

if TYPE_CHECKING:
    from portfolio_api.data.models.certification import Certification
    from portfolio_api.data.models.education import Education
    from portfolio_api.data.models.experience import Experience
    from portfolio_api.data.models.project import Project
    from portfolio_api.data.models.skill import Skill
    from portfolio_api.data.models.user_profile import UserProfile


class User(Base):
    """Application user account.

    Attributes:
        id: Generated UUID primary key.
        email: Unique login email.
        username: Unique public handle, used in storage paths and public URLs.
        password_hash: Salted hash of the user's password.
        name: Display name.
        created_at: UTC timestamp when the account was created.
        updated_at: UTC timestamp of the last change.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    profile: Mapped[UserProfile | None] = relationship(
        "UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    skills: Mapped[list[Skill]] = relationship(
        "Skill", back_populates="user", cascade="all, delete-orphan"
    )
    experiences: Mapped[list[Experience]] = relationship(
        "Experience", back_populates="user", cascade="all, delete-orphan"
    )
    education_entries: Mapped[list[Education]] = relationship(
        "Education", back_populates="user", cascade="all, delete-orphan"
    )
    certifications: Mapped[list[Certification]] = relationship(
        "Certification", back_populates="user", cascade="all, delete-orphan"
    )
    projects: Mapped[list[Project]] = relationship(
        "Project", back_populates="user", cascade="all, delete-orphan"
    )
