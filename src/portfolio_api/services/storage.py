"""Object storage uploads (Cloudflare R2 through the S3 API).

Files are written under ``{username}/{sub_folder}/{sanitized_file_name}`` and
served from the bucket's public URL. The boto3 client is created on first use
and reused for the life of the process.
"""

from __future__ import annotations

import base64
import logging
import re
from dataclasses import asdict, dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from portfolio_api.config import StorageSettings, get_storage_settings
from portfolio_api.errors import UploadError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

EXTENSION_TO_MIME = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "bmp": "image/bmp",
    "ico": "image/x-icon",
    "mp4": "video/mp4",
    "webm": "video/webm",
    "ogg": "video/ogg",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
}

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")
_REPEATED_HYPHENS = re.compile(r"-+")

_client = None


@dataclass(frozen=True)
class UploadResult:
    url: str
    file_id: str
    name: str
    size: int
    file_path: str
    thumbnail_url: str
    width: int = 0
    height: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def sanitize_file_name(file_name: str) -> str:
    """Make a file name safe for use as an object key segment."""
    cleaned = _WHITESPACE.sub("-", file_name)
    cleaned = _UNSAFE_CHARS.sub("", cleaned)
    cleaned = _REPEATED_HYPHENS.sub("-", cleaned)
    return cleaned.lower()


def get_content_type(file_name: str) -> str:
    """Return the MIME type for a file name based on its extension."""
    _, dot, extension = file_name.rpartition(".")
    if not dot:
        return DEFAULT_CONTENT_TYPE
    return EXTENSION_TO_MIME.get(extension.lower(), DEFAULT_CONTENT_TYPE)


def generate_file_id(file_path: str) -> str:
    """Return a display id for a stored object (base64 of its key)."""
    return base64.b64encode(file_path.encode("utf-8")).decode("ascii")


def build_file_path(file_name: str, username: str, sub_folder: str | None = None) -> str:
    folder = f"{username}/{sub_folder}" if sub_folder else username
    return f"{folder}/{sanitize_file_name(file_name)}"


def _require_settings() -> StorageSettings:
    settings = get_storage_settings()
    if settings is None:
        raise UploadError("Object storage is not configured")
    return settings


def get_storage_client():
    """Return the process-wide S3 client, creating it on first use."""
    global _client
    if _client is None:
        settings = _require_settings()
        _client = boto3.client(
            "s3",
            region_name="auto",
            endpoint_url=settings.endpoint_url,
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
        )
    return _client


def upload_file(
    data: bytes, file_name: str, username: str, sub_folder: str | None = None
) -> UploadResult:
    """Store ``data`` in the bucket and return where it can be fetched.

    Raises:
        UploadError: If storage is not configured or the transport fails.
    """
    settings = _require_settings()
    file_path = build_file_path(file_name, username, sub_folder)

    try:
        get_storage_client().put_object(
            Bucket=settings.bucket_name,
            Key=file_path,
            Body=data,
            ContentType=get_content_type(file_name),
        )
    except (BotoCoreError, ClientError) as exc:
        logger.exception("Upload of %s failed", file_path)
        raise UploadError("File upload failed") from exc

    url = f"{settings.public_url}/{file_path}"
    logger.info("Uploaded %s (%d bytes)", file_path, len(data))
    return UploadResult(
        url=url,
        file_id=generate_file_id(file_path),
        name=file_path.rsplit("/", 1)[-1],
        size=len(data),
        file_path=file_path,
        thumbnail_url=url,
    )
