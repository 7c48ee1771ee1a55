"""
Scanner Page

Camera capture (scale display or batch document) and image upload.
"""

import streamlit as st

from scentvalue.services.capture_service import (
    IMAGE_EXTENSIONS,
    SCANNING_MESSAGE,
    CameraFrameSource,
    CaptureService,
)
from ui.api_client import get_client
from ui.pages.calculator import PENDING_WEIGHT_KEY

CAMERA_MODE_KEY = "camera_mode"  # None when the camera is closed
STATUS_KEY = "scan_status"
CAMERA_WARNING_KEY = "camera_warning"


def render():
    """Render the scanning section."""
    st.subheader("Scan")

    status = st.session_state.get(STATUS_KEY)
    if status:
        st.info(status)

    warning = st.session_state.get(CAMERA_WARNING_KEY)
    if warning:
        st.warning(warning)
        if st.button("Dismiss", key="camera_warning_dismiss"):
            st.session_state.pop(CAMERA_WARNING_KEY, None)
            st.rerun()

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Scan scale", help="Read the weight off a scale display"):
            st.session_state[CAMERA_MODE_KEY] = "single"
    with col2:
        if st.button("Scan batch document", help="Read every name and weight on a sheet"):
            st.session_state[CAMERA_MODE_KEY] = "batch"
    with col3:
        uploaded = st.file_uploader(
            "Upload document",
            type=sorted(IMAGE_EXTENSIONS),
            help="Photos of batch sheets are added straight to the batch",
        )

    mode = st.session_state.get(CAMERA_MODE_KEY)
    if mode:
        render_camera(mode)

    if uploaded is not None and st.button("Scan upload", type="primary"):
        scan(uploaded.getvalue(), uploaded.name, "batch", uploaded.type or "image/jpeg")


def render_camera(mode: str):
    """Live camera; closed again after a capture or on cancel."""
    st.caption(
        "Point the camera at the scale display." if mode == "single"
        else "Fit the whole document in the frame."
    )

    photo = st.camera_input("Capture", key=f"camera_{mode}")

    col1, col2 = st.columns(2)
    with col1:
        scan_clicked = st.button("Scan photo", type="primary", key="camera_scan")
    with col2:
        if st.button("Cancel", key="camera_cancel"):
            close_camera()
            st.rerun()

    if not scan_clicked:
        return

    source = CameraFrameSource(photo.getvalue() if photo is not None else None)
    blocked = CaptureService.open_camera(source)
    close_camera()
    if blocked:
        st.session_state[CAMERA_WARNING_KEY] = blocked
        st.rerun()

    try:
        content = source.capture()
    finally:
        source.release()
    scan(content, source.filename, mode, "image/jpeg")


def close_camera():
    """Drop the camera widget so the browser stops the video stream."""
    mode = st.session_state.pop(CAMERA_MODE_KEY, None)
    if mode:
        st.session_state.pop(f"camera_{mode}", None)


def scan(content: bytes, filename: str, mode: str, content_type: str):
    """Send an image to the API and route the result."""
    client = get_client()
    st.session_state[STATUS_KEY] = SCANNING_MESSAGE

    with st.spinner("Scanning..."):
        result = client.scan_image(content, filename, mode=mode, content_type=content_type)

    if not result.success:
        st.session_state[STATUS_KEY] = f"Processing error: {result.error}"
        st.rerun()

    data = result.data
    st.session_state[STATUS_KEY] = data.get("message")
    if mode == "single" and (data.get("weight") or 0) > 0:
        st.session_state[PENDING_WEIGHT_KEY] = data["weight"]
    st.rerun()
