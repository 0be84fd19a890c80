"""Runtime configuration read from environment variables.

A ``.env`` file in the working directory is loaded once on import; variables
already exported take precedence. Values are looked up on each call so tests
can override them with ``monkeypatch.setenv`` without reloading modules.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_JWT_SECRET = "change-me"
DEFAULT_JWT_EXPIRES_IN = "7d"
DEFAULT_PORT = 3000

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


@dataclass(frozen=True)
class StorageSettings:
    """Connection details for the R2 (S3-compatible) bucket."""

    account_id: str
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    public_url: str

    @property
    def endpoint_url(self) -> str:
        return f"https://{self.account_id}.r2.cloudflarestorage.com"


def load_environment(dotenv_path: str | Path | None = None) -> bool:
    """Load ``KEY=value`` lines from a dotenv file into ``os.environ``.

    Without a path the nearest ``.env`` from the working directory upwards is
    used. Returns False when no file was found.
    """
    if dotenv_path is None:
        dotenv_path = find_dotenv(usecwd=True)
        if not dotenv_path:
            return False
    return load_dotenv(dotenv_path, override=False)


# Secrets (JWT_SECRET, R2_*) usually live in .env during development
load_environment()


def parse_duration(value: str) -> timedelta:
    """Parse durations such as ``7d``, ``12h``, ``30m`` or ``3600``."""
    match = _DURATION_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def get_jwt_secret() -> str:
    return os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET


def get_jwt_expires_in() -> timedelta:
    return parse_duration(os.getenv("JWT_EXPIRES_IN") or DEFAULT_JWT_EXPIRES_IN)


def get_storage_settings() -> StorageSettings | None:
    """Return the storage settings, or None when any of them is missing."""
    values = {
        "account_id": os.getenv("R2_ACCOUNT_ID"),
        "access_key_id": os.getenv("R2_ACCESS_KEY_ID"),
        "secret_access_key": os.getenv("R2_SECRET_ACCESS_KEY"),
        "bucket_name": os.getenv("R2_BUCKET_NAME"),
        "public_url": os.getenv("R2_PUBLIC_URL"),
    }
    if not all(values.values()):
        return None
    values["public_url"] = values["public_url"].rstrip("/")
    return StorageSettings(**values)


def get_port() -> int:
    return int(os.getenv("PORT") or DEFAULT_PORT)


def get_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS") or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
