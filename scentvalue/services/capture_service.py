"""
Capture Service

Image acquisition (camera frame or uploaded file) and the handoff to the
assistant:
- single mode: read one scale display, return the weight for the user to confirm
- batch mode: read a document and add every recognised line to the ledger
"""

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from scentvalue.models.assistant import ScanResult
from scentvalue.models.common import CaptureMode
from scentvalue.services.assistant_service import AssistantBackend
from scentvalue.services.formatting import format_number
from scentvalue.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

CAMERA_BLOCKED_MESSAGE = "Camera blocked. Please use the Upload button below to scan your document."
SCANNING_MESSAGE = "Scanning document for names and weights..."
NO_DATA_MESSAGE = "No valid data found in the image. Please try a clearer photo."
PROCESSING_ERROR_MESSAGE = "Processing error. Please try again."

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "gif", "heic", "heif", "bmp"}


class CaptureError(Exception):
    """Base class for image acquisition errors."""


class CameraUnavailableError(CaptureError):
    """Camera permission denied or no device present."""


class InvalidImageError(CaptureError):
    """Payload is not a usable image."""


# =============================================================================
# Image sources
# =============================================================================

class ImageSource(ABC):
    """A device or buffer that produces one still image."""

    @abstractmethod
    def open(self) -> None:
        """Acquire the underlying device/stream."""

    @abstractmethod
    def capture(self) -> bytes:
        """Grab a still image."""

    @abstractmethod
    def release(self) -> None:
        """Stop every underlying stream. Safe to call more than once."""


class UploadedImageSource(ImageSource):
    """An image that has already been read into memory (file upload, camera widget)."""

    def __init__(self, data: bytes, filename: Optional[str] = None):
        self.data = data
        self.filename = filename
        self.is_open = False

    def open(self) -> None:
        if not self.data:
            raise InvalidImageError("Uploaded image is empty")
        self.is_open = True

    def capture(self) -> bytes:
        if not self.is_open:
            raise CaptureError("Image source is not open")
        return self.data

    def release(self) -> None:
        self.is_open = False


class CameraFrameSource(UploadedImageSource):
    """
    The still from a browser camera widget.

    The widget yields no frame when the user denies camera access or no
    device is present, so a missing frame is reported as an unavailable camera.
    """

    def __init__(self, frame: Optional[bytes], filename: str = "capture.jpg"):
        super().__init__(frame or b"", filename)
        self.has_frame = frame is not None

    def open(self) -> None:
        if not self.has_frame:
            raise CameraUnavailableError("No frame from the camera; access may be blocked")
        super().open()


@contextmanager
def capture_session(source: ImageSource) -> Iterator[ImageSource]:
    """
    Open an image source and always release it.

    The source is released on capture success, on cancel (leaving the block
    early) and when an exception escapes.
    """
    source.open()
    try:
        yield source
    finally:
        source.release()
        logger.debug(f"Released image source {type(source).__name__}")


# =============================================================================
# Encoding helpers
# =============================================================================

def encode_image(data: bytes) -> str:
    """Base64 payload for transmission."""
    return base64.b64encode(data).decode("ascii")


def decode_data_url(data_url: str) -> str:
    """
    Strip the 'data:<mime>;base64,' prefix and return the base64 payload.

    Plain base64 passes through unchanged.

    Raises:
        InvalidImageError: if the payload is empty or not valid base64
    """
    payload = data_url.strip()
    if payload.startswith("data:"):
        _, _, payload = payload.partition(",")
    if not payload:
        raise InvalidImageError("Image payload is empty")
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidImageError("Image payload is not valid base64")
    return payload


def is_image_upload(filename: Optional[str], content_type: Optional[str] = None) -> bool:
    """Only image files are accepted for scanning."""
    if content_type and content_type.startswith("image/"):
        return True
    if filename and "." in filename:
        return filename.rsplit(".", 1)[-1].lower() in IMAGE_EXTENSIONS
    return False


# =============================================================================
# Service
# =============================================================================

class CaptureService:
    """Routes captured images through the assistant into the ledger."""

    def __init__(self, assistant: AssistantBackend, ledger: LedgerService):
        self.assistant = assistant
        self.ledger = ledger

    def grab(self, source: ImageSource) -> str:
        """Capture one still from a source and encode it, releasing the source afterwards."""
        with capture_session(source) as opened:
            return encode_image(opened.capture())

    @staticmethod
    def open_camera(source: ImageSource) -> Optional[str]:
        """
        Try to acquire a camera source.

        Returns None on success, or the fallback message pointing the user at
        file upload when the camera is blocked.
        """
        try:
            source.open()
        except CameraUnavailableError as e:
            logger.warning(f"Camera unavailable: {e}")
            source.release()
            return CAMERA_BLOCKED_MESSAGE
        return None

    async def process_image(self, image_base64: str, mode: CaptureMode) -> ScanResult:
        """
        Recognise an image and route the result.

        Single mode returns the detected weight without touching the ledger;
        batch mode adds every recognised item directly.
        """
        try:
            if mode == CaptureMode.SINGLE:
                weight = await self.assistant.read_scale_image(image_base64)
                return ScanResult(
                    mode=mode,
                    weight=weight,
                    message=f"Detected Weight: {format_number(weight)}g",
                )

            items = await self.assistant.read_batch_document(image_base64)
            if not items:
                return ScanResult(mode=mode, message=NO_DATA_MESSAGE)

            added = []
            for item in items:
                entry = self.ledger.add_entry(item.weight, item.name)
                if entry is not None:
                    added.append(entry)
            logger.info(f"Batch scan recognised {len(items)} items, added {len(added)}")
            return ScanResult(
                mode=mode,
                items=items,
                added=added,
                message=f"Successfully found {len(items)} items in document. Added to pending batch.",
            )
        except Exception as e:
            logger.exception(f"Image processing failed: {e}")
            return ScanResult(mode=mode, message=PROCESSING_ERROR_MESSAGE, success=False)

    async def process_source(self, source: ImageSource, mode: CaptureMode) -> ScanResult:
        """Capture from a source (released on every path) and process the still."""
        try:
            image_base64 = self.grab(source)
        except CaptureError as e:
            logger.warning(f"Image capture failed: {e}")
            return ScanResult(mode=mode, message=PROCESSING_ERROR_MESSAGE, success=False)
        return await self.process_image(image_base64, mode)
