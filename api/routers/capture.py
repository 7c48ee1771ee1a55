"""
Capture API Routes

Scan a scale display (single) or a batch document (batch) from an uploaded
image or a base64 camera frame.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from api.config import get_settings
from api.dependencies import get_api_key, get_capture_service
from api.middleware.errors import UnsupportedMediaError, ValidationError
from api.middleware.logging import get_request_id
from scentvalue.models.assistant import ScanRequest, ScanResult
from scentvalue.models.common import CaptureMode
from scentvalue.services import CaptureService
from scentvalue.services.capture_service import (
    InvalidImageError,
    UploadedImageSource,
    decode_data_url,
    is_image_upload,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_api_key)])


@router.post("/scan", response_model=ScanResult)
async def scan_upload(
    request: Request,
    image: UploadFile = File(...),
    mode: CaptureMode = Form(default=CaptureMode.BATCH),
    capture: CaptureService = Depends(get_capture_service),
):
    """
    Scan an uploaded image file.

    Only image files are accepted. Batch mode adds every recognised item to
    the ledger; single mode only returns the detected weight.
    """
    if not is_image_upload(image.filename, image.content_type):
        raise UnsupportedMediaError(
            f"Only image files can be scanned: {image.filename}",
            details={"content_type": image.content_type},
        )

    content = await image.read()
    max_bytes = get_settings().max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise ValidationError(f"Image exceeds {get_settings().max_upload_size_mb} MB")

    logger.info(f"[{get_request_id(request)}] Scanning {image.filename} ({len(content)} bytes, {mode.value})")
    return await capture.process_source(UploadedImageSource(content, image.filename), mode)


@router.post("/scan-base64", response_model=ScanResult)
async def scan_base64(
    scan: ScanRequest,
    capture: CaptureService = Depends(get_capture_service),
):
    """Scan a base64 camera frame (a 'data:image/...;base64,' prefix is stripped)."""
    try:
        payload = decode_data_url(scan.image_base64)
    except InvalidImageError as e:
        raise ValidationError(str(e))
    return await capture.process_image(payload, scan.mode)
