"""Validation of user-supplied image files before they are stored."""

from __future__ import annotations

from dataclasses import dataclass

from portfolio_api.errors import ValidationError

MAX_IMAGE_BYTES = 10 * 1024 * 1024
MAX_PROJECT_CONTENT_IMAGES = 10


@dataclass(frozen=True)
class ImageUpload:
    """An image file read from a request, ready to be uploaded."""

    filename: str
    content_type: str
    data: bytes


def validate_image(
    *, field: str, filename: str | None, content_type: str | None, data: bytes
) -> ImageUpload:
    """Check that an uploaded file is an image within the size limit.

    Raises:
        ValidationError: If the file is not an image or is too large.
    """
    normalized = (content_type or "").strip().lower()
    if not normalized.startswith("image/"):
        raise ValidationError(
            "Only image files are allowed",
            details=[{"field": field, "message": "Only image files are allowed"}],
        )
    if len(data) > MAX_IMAGE_BYTES:
        raise ValidationError(
            "File too large",
            details=[{"field": field, "message": "Image must be 10 MiB or smaller"}],
        )
    return ImageUpload(filename=filename or field, content_type=normalized, data=data)


def check_file_count(field: str, count: int, limit: int) -> None:
    if count > limit:
        raise ValidationError(
            f"Too many files for {field}",
            details=[{"field": field, "message": f"At most {limit} file(s) allowed"}],
        )
