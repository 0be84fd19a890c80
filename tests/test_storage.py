"""Tests for the object storage uploader."""

from __future__ import annotations

import base64

import pytest
from botocore.exceptions import ClientError

import portfolio_api.services.storage as storage
from portfolio_api.errors import UploadError
from portfolio_api.services.storage import (
    build_file_path,
    generate_file_id,
    get_content_type,
    sanitize_file_name,
    upload_file,
)
from conftest import PNG_BYTES, PUBLIC_URL, FakeS3Client


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("My Photo.PNG", "my-photo.png"),
        ("a  b\tc.jpg", "a-b-c.jpg"),
        ("résumé (final).pdf", "rsum-final.pdf"),
        ("x---y.gif", "x-y.gif"),
        ("../../etc/passwd", "....etcpasswd"),
    ],
)
def test_sanitize_file_name(raw: str, expected: str) -> None:
    assert sanitize_file_name(raw) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("photo.JPG", "image/jpeg"),
        ("icon.svg", "image/svg+xml"),
        ("clip.mp4", "video/mp4"),
        ("archive.tar.gz", "application/octet-stream"),
        ("README", "application/octet-stream"),
    ],
)
def test_get_content_type(name: str, expected: str) -> None:
    assert get_content_type(name) == expected


def test_build_file_path() -> None:
    assert build_file_path("Go Logo.png", "alice", "skills") == "alice/skills/go-logo.png"
    assert build_file_path("avatar.png", "alice") == "alice/avatar.png"


def test_file_id_encodes_the_key() -> None:
    file_id = generate_file_id("alice/skills/go.png")
    assert base64.b64decode(file_id).decode() == "alice/skills/go.png"


def test_upload_file_puts_object(fake_storage: FakeS3Client) -> None:
    result = upload_file(PNG_BYTES, "Go Logo.png", "alice", "skills")

    stored = fake_storage.objects["alice/skills/go-logo.png"]
    assert stored["Bucket"] == "portfolio"
    assert stored["Body"] == PNG_BYTES
    assert stored["ContentType"] == "image/png"
    assert result.url == f"{PUBLIC_URL}/alice/skills/go-logo.png"
    assert result.name == "go-logo.png"
    assert result.size == len(PNG_BYTES)
    assert result.to_dict()["file_id"] == generate_file_id("alice/skills/go-logo.png")


def test_upload_without_configuration_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("R2_BUCKET_NAME", raising=False)
    monkeypatch.setattr(storage, "_client", None)

    with pytest.raises(UploadError, match="not configured"):
        upload_file(PNG_BYTES, "go.png", "alice")


def test_transport_failure_becomes_upload_error(
    fake_storage: FakeS3Client, monkeypatch: pytest.MonkeyPatch
) -> None:
    def fail(**kwargs: object) -> None:
        raise ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")

    monkeypatch.setattr(fake_storage, "put_object", fail)

    with pytest.raises(UploadError, match="File upload failed"):
        upload_file(PNG_BYTES, "go.png", "alice")


def test_client_is_created_once(
    monkeypatch: pytest.MonkeyPatch, fake_storage: FakeS3Client
) -> None:
    monkeypatch.setattr(storage, "_client", None)
    created: list[dict] = []

    def fake_client(service: str, **kwargs: object) -> FakeS3Client:
        created.append({"service": service, **kwargs})
        return fake_storage

    monkeypatch.setattr(storage.boto3, "client", fake_client)

    assert storage.get_storage_client() is fake_storage
    assert storage.get_storage_client() is fake_storage
    assert len(created) == 1
    assert created[0]["endpoint_url"] == "https://account.r2.cloudflarestorage.com"
