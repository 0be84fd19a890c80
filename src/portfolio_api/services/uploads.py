"""Generic image upload into the caller's folder of the bucket."""

from __future__ import annotations

from portfolio_api.data.db import get_session
from portfolio_api.services.auth import require_user
from portfolio_api.services.images import ImageUpload
from portfolio_api.services.storage import UploadResult, upload_file

UPLOAD_FOLDER = "uploads"


def upload_user_image(
    user_id: str, image: ImageUpload, sub_folder: str = UPLOAD_FOLDER
) -> UploadResult:
    """Store an image under ``<username>/<sub_folder>/``."""
    with get_session() as session:
        username = require_user(session, user_id).username
    return upload_file(image.data, image.filename, username, sub_folder)
