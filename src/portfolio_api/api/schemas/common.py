"""Shared Pydantic schemas for API requests and responses.

JSON bodies use camelCase keys (``skillIds``, ``companyName``); Python code
uses snake_case field names. ``ApiModel`` accepts both on input and always
emits camelCase.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, Generic, TypeVar
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Skill ids are validated as UUIDs but handed to services as plain strings
SkillId = Annotated[UUID, PlainSerializer(str, return_type=str)]


def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive datetimes; everything is stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def sent_fields(self, *always: str) -> dict[str, Any]:
        """Dump the fields the client sent, plus ``always`` with their defaults.

        Services write only the keys they receive, so an omitted optional field
        keeps its stored value on update.
        """
        data = self.model_dump(exclude_unset=True)
        for name in always:
            data.setdefault(name, self.model_dump(include={name})[name])
        return data


class DataResponse(BaseModel, Generic[T]):
    """Successful response carrying a payload."""

    success: bool = True
    data: T


class MessageResponse(BaseModel):
    """Successful response carrying only a message (e.g. after a delete)."""

    success: bool = True
    message: str


class ErrorDetail(BaseModel):
    field: str = Field(description="Offending field, dotted for nested fields")
    message: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    success: bool = False
    error: str
    details: list[ErrorDetail] | None = None


def ok(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def deleted(label: str) -> dict[str, Any]:
    return {"success": True, "message": f"{label} deleted successfully"}


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    401: {"model": ErrorResponse, "description": "Authentication required"},
    404: {"model": ErrorResponse, "description": "Not found"},
}
