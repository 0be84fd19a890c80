"""ORM model for skills.

A skill belongs to one user and can be tagged onto that user's experience,
certification and project entries through the junction tables defined next to
each of those models.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_api.data.db import Base

if TYPE_CHECKING:
    from portfolio_api.data.models.certification import CertificationSkill
    from portfolio_api.data.models.experience import ExperienceSkill
    from portfolio_api.data.models.project import ProjectSkill
    from portfolio_api.data.models.user import User


class Skill(Base):
    """A skill with its icon.

    Attributes:
        id: Generated UUID primary key.
        user_id: Owning user.
        name: Skill name (e.g., "Go", "PostgreSQL").
        icon: Public URL of the uploaded icon.
    """

    __tablename__ = "skills"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    icon: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user: Mapped[User] = relationship("User", back_populates="skills")

    # Junction rows go away with the skill
    experience_links: Mapped[list[ExperienceSkill]] = relationship(
        "ExperienceSkill", back_populates="skill", cascade="all, delete-orphan"
    )
    certification_links: Mapped[list[CertificationSkill]] = relationship(
        "CertificationSkill", back_populates="skill", cascade="all, delete-orphan"
    )
    project_links: Mapped[list[ProjectSkill]] = relationship(
        "ProjectSkill", back_populates="skill", cascade="all, delete-orphan"
    )
