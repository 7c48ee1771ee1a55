"""Tests for image capture and scan routing."""

import asyncio

import pytest

from scentvalue.models.assistant import BatchItem
from scentvalue.models.common import CaptureMode
from scentvalue.services.assistant_service import StubAssistant
from scentvalue.services.capture_service import (
    CAMERA_BLOCKED_MESSAGE,
    NO_DATA_MESSAGE,
    PROCESSING_ERROR_MESSAGE,
    CameraFrameSource,
    CameraUnavailableError,
    CaptureService,
    ImageSource,
    InvalidImageError,
    UploadedImageSource,
    capture_session,
    decode_data_url,
    encode_image,
    is_image_upload,
)


class FakeCamera(ImageSource):
    """Tracks open/release like a media stream with tracks."""

    def __init__(self, frame=b"\xff\xd8frame", blocked=False, fail_capture=False):
        self.frame = frame
        self.blocked = blocked
        self.fail_capture = fail_capture
        self.active = False
        self.released = 0

    def open(self):
        if self.blocked:
            raise CameraUnavailableError("Permission denied")
        self.active = True

    def capture(self):
        if self.fail_capture:
            raise RuntimeError("frame grab failed")
        return self.frame

    def release(self):
        self.active = False
        self.released += 1


class FailingAssistant(StubAssistant):
    async def read_batch_document(self, image_base64):
        raise RuntimeError("unexpected")


@pytest.fixture
def capture(stub_assistant, ledger):
    return CaptureService(assistant=stub_assistant, ledger=ledger)


def test_single_scan_does_not_touch_ledger(capture, ledger):
    result = asyncio.run(capture.process_image("aGVsbG8=", CaptureMode.SINGLE))

    assert result.weight == 1236
    assert result.message == "Detected Weight: 1236g"
    assert ledger.count() == 0


def test_batch_scan_adds_every_item(capture, ledger):
    result = asyncio.run(capture.process_image("aGVsbG8=", CaptureMode.BATCH))

    assert result.success
    assert len(result.added) == 2
    assert result.message == "Successfully found 2 items in document. Added to pending batch."
    # Added in document order, so the last line ends up first
    assert [e.label for e in ledger.list_entries()] == ["Blue de Chanel", "Sauvage Dior"]


def test_batch_scan_skips_non_positive_weights(ledger):
    assistant = StubAssistant(batch_items=[
        BatchItem(name="Good", weight=900),
        BatchItem(name="Zero", weight=0),
        BatchItem(name="Negative", weight=-5),
    ])
    capture = CaptureService(assistant=assistant, ledger=ledger)

    result = asyncio.run(capture.process_image("aGVsbG8=", CaptureMode.BATCH))

    assert len(result.items) == 3
    assert len(result.added) == 1
    assert ledger.count() == 1


def test_batch_scan_with_nothing_recognised(ledger):
    capture = CaptureService(assistant=StubAssistant(), ledger=ledger)

    result = asyncio.run(capture.process_image("aGVsbG8=", CaptureMode.BATCH))

    assert result.message == NO_DATA_MESSAGE
    assert ledger.count() == 0


def test_unexpected_failure_degrades_to_message(ledger):
    capture = CaptureService(assistant=FailingAssistant(), ledger=ledger)

    result = asyncio.run(capture.process_image("aGVsbG8=", CaptureMode.BATCH))

    assert not result.success
    assert result.message == PROCESSING_ERROR_MESSAGE


def test_capture_session_releases_on_success():
    camera = FakeCamera()

    with capture_session(camera) as source:
        assert camera.active
        source.capture()

    assert not camera.active
    assert camera.released == 1


def test_capture_session_releases_on_error():
    camera = FakeCamera(fail_capture=True)

    with pytest.raises(RuntimeError):
        with capture_session(camera) as source:
            source.capture()

    assert not camera.active
    assert camera.released == 1


def test_grab_encodes_and_releases(capture):
    camera = FakeCamera(frame=b"hello")

    assert capture.grab(camera) == "aGVsbG8="
    assert camera.released == 1


def test_process_source_single(capture, ledger):
    camera = FakeCamera()

    result = asyncio.run(capture.process_source(camera, CaptureMode.SINGLE))

    assert result.weight == 1236
    assert not camera.active


def test_blocked_camera_returns_fallback_message(capture):
    camera = FakeCamera(blocked=True)

    assert capture.open_camera(camera) == CAMERA_BLOCKED_MESSAGE
    assert not camera.active


def test_open_camera_success(capture):
    camera = FakeCamera()

    assert capture.open_camera(camera) is None
    assert camera.active
    camera.release()


def test_empty_upload_is_rejected():
    with pytest.raises(InvalidImageError):
        UploadedImageSource(b"").open()


def test_decode_data_url():
    assert decode_data_url("data:image/jpeg;base64,aGVsbG8=") == "aGVsbG8="
    assert decode_data_url("aGVsbG8=") == "aGVsbG8="


@pytest.mark.parametrize("payload", ["data:image/jpeg;base64,", "not base64!!", ""])
def test_decode_data_url_rejects(payload):
    with pytest.raises(InvalidImageError):
        decode_data_url(payload)


def test_encode_image():
    assert encode_image(b"hello") == "aGVsbG8="


def test_is_image_upload():
    assert is_image_upload("scan.jpg")
    assert is_image_upload("SCAN.PNG")
    assert is_image_upload("blob", "image/webp")
    assert not is_image_upload("batch.pdf", "application/pdf")
    assert not is_image_upload("notes.txt")
    assert not is_image_upload(None)


def test_camera_frame_missing_returns_fallback_message():
    source = CameraFrameSource(None)

    assert CaptureService.open_camera(source) == CAMERA_BLOCKED_MESSAGE
    assert not source.is_open


def test_camera_frame_present_opens_and_captures():
    source = CameraFrameSource(b"\xff\xd8frame")

    assert CaptureService.open_camera(source) is None
    assert source.capture() == b"\xff\xd8frame"
    assert source.filename == "capture.jpg"
    source.release()
    assert not source.is_open


def test_camera_frame_grab_encodes(capture):
    assert capture.grab(CameraFrameSource(b"hello")) == "aGVsbG8="
