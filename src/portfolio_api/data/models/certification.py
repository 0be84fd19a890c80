"""Certification model and its skill tags."""

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


class Certification(Base):
    """Certification earned by a user.

    Attributes:
        id: Generated UUID primary key.
        user_id: Foreign key to users table.
        name: Certificate title.
        issuing_organization: Who issued it.
        year: Year it was awarded.
        description: Free-text description.
        certificate_link: Optional verification URL.
    """

    __tablename__ = "certifications"

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
    issuing_organization: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    certificate_link: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user: Mapped[User] = relationship("User", back_populates="certifications")
    skill_links: Mapped[list[CertificationSkill]] = relationship(
        "CertificationSkill", back_populates="certification", cascade="all, delete-orphan"
    )


class CertificationSkill(Base):
    """Many-to-many association between certifications and skills."""

    __tablename__ = "certification_skills"
    __table_args__ = (
        UniqueConstraint("certification_id", "skill_id", name="uq_certification_skill"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    certification_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("certifications.id", ondelete="CASCADE"),
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

    certification: Mapped[Certification] = relationship(
        "Certification", back_populates="skill_links"
    )
    skill: Mapped[Skill] = relationship("Skill", back_populates="certification_links")
