"""Reading mixed form/JSON bodies and their image files.

Routes that accept images take ``multipart/form-data``; the same routes also
accept a plain JSON body when no files are attached. A field may arrive either
as a file or as text (``profilePhoto`` can be an upload or a URL), so the form
is split by value type rather than by declared parameter.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Collection
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request
from starlette.datastructures import FormData, UploadFile

from portfolio_api.errors import ValidationError
from portfolio_api.services.images import (
    MAX_IMAGE_BYTES,
    ImageUpload,
    check_file_count,
    validate_image,
)

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class RequestPayload:
    data: dict[str, Any] = field(default_factory=dict)
    files: dict[str, list[UploadFile]] = field(default_factory=dict)


def _list_value(values: list[str]) -> Any:
    # A single form value may carry a JSON-encoded array.
    if len(values) == 1 and values[0].lstrip().startswith("["):
        try:
            return json.loads(values[0])
        except json.JSONDecodeError:
            return values
    return values


def split_form(form: FormData, list_fields: Collection[str] = ()) -> RequestPayload:
    """Separate text fields from file parts."""
    payload = RequestPayload()
    for key in form.keys():
        values = form.getlist(key)
        # Browsers send an empty part for an untouched file input
        files = [v for v in values if isinstance(v, UploadFile) and (v.filename or v.size)]
        texts = [v for v in values if isinstance(v, str)]
        if files:
            payload.files[key] = files
        if not texts:
            continue
        if key in list_fields:
            payload.data[key] = _list_value(texts)
        else:
            payload.data[key] = texts[-1]
    return payload


@asynccontextmanager
async def read_payload(
    request: Request, list_fields: Collection[str] = ()
) -> AsyncIterator[RequestPayload]:
    """Yield the request's fields and files; uploaded files close on exit."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        async with request.form() as form:
            yield split_form(form, list_fields)
        return

    body = await request.body()
    try:
        data = json.loads(body) if body else {}
    except json.JSONDecodeError as exc:
        raise ValidationError(
            "Validation failed", details=[{"field": "body", "message": "Malformed JSON"}]
        ) from exc
    if not isinstance(data, dict):
        raise ValidationError(
            "Validation failed",
            details=[{"field": "body", "message": "Body must be a JSON object"}],
        )
    yield RequestPayload(data=data)


async def read_image(field_name: str, upload: UploadFile) -> ImageUpload:
    # Read one byte past the limit so oversized files are detected without
    # pulling the whole thing into memory.
    data = await upload.read(MAX_IMAGE_BYTES + 1)
    return validate_image(
        field=field_name,
        filename=upload.filename,
        content_type=upload.content_type,
        data=data,
    )


async def read_images(
    payload: RequestPayload, field_name: str, limit: int
) -> list[ImageUpload]:
    uploads = payload.files.get(field_name, [])
    check_file_count(field_name, len(uploads), limit)
    return [await read_image(field_name, upload) for upload in uploads]


async def read_single_image(payload: RequestPayload, field_name: str) -> ImageUpload | None:
    images = await read_images(payload, field_name, 1)
    return images[0] if images else None
