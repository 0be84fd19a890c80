"""Education model for storing a user's educational history."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_api.data.db import Base

if TYPE_CHECKING:
    from portfolio_api.data.models.user import User


class Education(Base):
    """Education entry.

    Attributes:
        id: Generated UUID primary key.
        user_id: Foreign key to users table.
        year: Free-text period label, e.g. "2016-2020".
        institution_name: Name of school/university.
        description: Degree, field of study, achievements.
    """

    __tablename__ = "education"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    year: Mapped[str] = mapped_column(String(50), nullable=False)
    institution_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user: Mapped[User] = relationship("User", back_populates="education_entries")
