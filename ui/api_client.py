"""
API Client for ScentValue Streamlit UI

Provides a clean interface to the FastAPI backend.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, Optional

import requests
from requests.exceptions import RequestException, Timeout

from ui.config import get_settings

logger = logging.getLogger(__name__)

FILENAME_PATTERN = re.compile(r'filename="?([^";]+)"?')


@dataclass
class APIResponse:
    """Wrapper for API responses."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    status_code: int = 0
    content: Optional[bytes] = None
    filename: Optional[str] = None


class ScentValueClient:
    """
    Client for the ScentValue API.

    Usage:
        client = ScentValueClient()

        # Add a bottle
        result = client.add_entry(expression="1kg236", label="Sauvage Dior")

        # Download the batch
        result = client.download_export("xlsx")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.api_key = api_key or settings.api_key
        self.timeout = timeout or settings.request_timeout

        self.session = requests.Session()
        if self.api_key:
            self.session.headers["X-API-Key"] = self.api_key

    def _request(
        self,
        method: str,
        endpoint: str,
        raw: bool = False,
        **kwargs,
    ) -> APIResponse:
        """Make an API request. With raw=True the body is returned as bytes."""
        url = f"{self.base_url}{endpoint}"
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)

            if response.status_code >= 400:
                try:
                    error_data = response.json() if response.content else {}
                except ValueError:
                    error_data = {}
                error_msg = error_data.get("error", {}).get("message", response.text)
                return APIResponse(
                    success=False,
                    error=error_msg,
                    status_code=response.status_code,
                )

            if raw:
                disposition = response.headers.get("Content-Disposition", "")
                match = FILENAME_PATTERN.search(disposition)
                return APIResponse(
                    success=True,
                    content=response.content,
                    filename=match.group(1) if match else None,
                    status_code=response.status_code,
                )

            content_type = response.headers.get("Content-Type", "")
            if content_type.startswith("text/plain"):
                data = response.text
            else:
                data = response.json() if response.content else {}
            return APIResponse(
                success=True,
                data=data,
                status_code=response.status_code,
            )

        except Timeout:
            return APIResponse(
                success=False,
                error="Request timed out",
                status_code=0,
            )
        except RequestException as e:
            return APIResponse(
                success=False,
                error=f"Request failed: {str(e)}",
                status_code=0,
            )

    # Health endpoints

    def health_check(self) -> APIResponse:
        """Check if the API is healthy."""
        return self._request("GET", "/health")

    def ready_check(self) -> APIResponse:
        """Check if the API is ready (all dependencies available)."""
        return self._request("GET", "/health/ready")

    # Pricing / weights

    def get_config(self) -> APIResponse:
        """Tare, rate and currency in effect."""
        return self._request("GET", "/api/v1/config")

    def resolve_weight(self, expression: str) -> APIResponse:
        """Resolve a typed weight expression to grams."""
        return self._request("POST", "/api/v1/weights/resolve", json={"expression": expression})

    def quote(self, gross_weight: float) -> APIResponse:
        """Price a gross reading without storing it."""
        return self._request("POST", "/api/v1/weights/quote", json={"gross_weight": gross_weight})

    # Ledger

    def get_ledger(self) -> APIResponse:
        """Current batch with totals."""
        return self._request("GET", "/api/v1/ledger")

    def add_entry(
        self,
        expression: Optional[str] = None,
        gross_weight: Optional[float] = None,
        label: Optional[str] = None,
    ) -> APIResponse:
        """Add a bottle to the batch."""
        body: Dict[str, Any] = {}
        if expression is not None:
            body["expression"] = expression
        if gross_weight is not None:
            body["gross_weight"] = gross_weight
        if label:
            body["label"] = label
        return self._request("POST", "/api/v1/ledger/entries", json=body)

    def clear_ledger(self) -> APIResponse:
        """Empty the batch."""
        return self._request("DELETE", "/api/v1/ledger")

    # Exports

    def entry_text(self, entry_id: str) -> APIResponse:
        """Single-item summary line."""
        return self._request("GET", f"/api/v1/exports/entries/{entry_id}/text")

    def clipboard_texts(self) -> APIResponse:
        """Batch text and CSV text."""
        return self._request("GET", "/api/v1/exports/clipboard")

    def download_export(self, kind: str) -> APIResponse:
        """Download the batch as 'xlsx' or 'pdf'."""
        return self._request("GET", f"/api/v1/exports/{kind}", raw=True)

    # Capture / assistant

    def scan_image(
        self,
        file_content: BinaryIO,
        filename: str,
        mode: str = "batch",
        content_type: str = "image/jpeg",
    ) -> APIResponse:
        """Send an image for scale (single) or document (batch) reading."""
        files = {"image": (filename, file_content, content_type)}
        return self._request(
            "POST",
            "/api/v1/capture/scan",
            files=files,
            data={"mode": mode},
            timeout=get_settings().scan_timeout,
        )

    def ask(self, query: str) -> APIResponse:
        """Ask the fragrance assistant."""
        return self._request(
            "POST",
            "/api/v1/assistant/ask",
            json={"query": query},
            timeout=get_settings().scan_timeout,
        )


_client: Optional[ScentValueClient] = None


def get_client() -> ScentValueClient:
    """Get or create the API client singleton."""
    global _client
    if _client is None:
        _client = ScentValueClient()
    return _client
