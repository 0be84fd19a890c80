"""Lookups shared by the owned-resource services."""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.orm import Session

from portfolio_api.data.models import User
from portfolio_api.errors import NotFoundError

ModelT = TypeVar("ModelT")


def get_owned_or_404(
    session: Session,
    model: type[ModelT],
    user_id: str | None,
    entity_id: str,
    label: str,
    *,
    for_update: bool = False,
) -> ModelT:
    """Return the row with ``entity_id`` if it belongs to ``user_id``.

    Rows owned by other users are reported exactly like missing rows.
    """
    if not user_id:
        raise NotFoundError(f"{label} not found")
    query = session.query(model).filter(model.id == entity_id, model.user_id == user_id)
    if for_update:
        query = query.with_for_update()
    entity = query.first()
    if entity is None:
        raise NotFoundError(f"{label} not found")
    return entity


def get_user_by_username_or_404(session: Session, username: str) -> User:
    user = session.query(User).filter(User.username == username).first()
    if user is None:
        raise NotFoundError("User not found")
    return user
