"""Experience model for storing a user's work history.

Each entry can be tagged with any number of skills through ExperienceSkill.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_api.data.db import Base

if TYPE_CHECKING:
    from portfolio_api.data.models.skill import Skill
    from portfolio_api.data.models.user import User


class Experience(Base):
    """Work experience entry.

    Attributes:
        id: Generated UUID primary key.
        user_id: Foreign key to users table.
        start_year: Year the position started.
        end_year: Year the position ended (None if current).
        company_name: Name of the company/organization.
        description: Description of the role.
        location: Job location (city, country, or remote).
    """

    __tablename__ = "experience"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    start_year: Mapped[int] = mapped_column(Integer, nullable=False)
    end_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="experiences")
    skill_links: Mapped[list[ExperienceSkill]] = relationship(
        "ExperienceSkill", back_populates="experience", cascade="all, delete-orphan"
    )


class ExperienceSkill(Base):
    """Many-to-many association between experience entries and skills."""

    __tablename__ = "experience_skills"
    __table_args__ = (
        UniqueConstraint("experience_id", "skill_id", name="uq_experience_skill"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    experience_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("experience.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    skill_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("skills.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    experience: Mapped[Experience] = relationship("Experience", back_populates="skill_links")
    skill: Mapped[Skill] = relationship("Skill", back_populates="experience_links")
