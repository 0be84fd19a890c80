"""Generic image upload route."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool

from portfolio_api.api.dependencies import CurrentUserId
from portfolio_api.api.schemas.common import ERROR_RESPONSES, DataResponse, ok
from portfolio_api.api.schemas.upload import UploadResponse
from portfolio_api.api.uploads import read_payload, read_single_image
from portfolio_api.errors import ValidationError
from portfolio_api.services.uploads import upload_user_image

router = APIRouter(prefix="/upload", tags=["upload"], responses=ERROR_RESPONSES)


@router.post("", response_model=DataResponse[UploadResponse])
async def upload_image(request: Request, user_id: CurrentUserId) -> dict:
    """Store the ``image`` file under the caller's uploads folder."""
    async with read_payload(request) as payload:
        image = await read_single_image(payload, "image")
    if image is None:
        raise ValidationError(
            "No file uploaded",
            details=[{"field": "image", "message": "Image file is required"}],
        )
    result = await run_in_threadpool(upload_user_image, user_id, image)
    return ok(result.to_dict())
