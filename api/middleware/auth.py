"""
Authentication Middleware

Optional API key check for ledger, export and assistant endpoints.
"""

import secrets
from typing import Optional

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from api.config import get_settings

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(
    api_key: Optional[str] = Security(api_key_header)
) -> str:
    """
    Verify API key from request header.

    With no keys configured the API is open (single-user, local install).
    Raises HTTPException if keys are configured and the header is missing or wrong.
    """
    settings = get_settings()

    if not settings.api_key_list:
        return "open-access"

    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": {
                    "code": "AUTH_REQUIRED",
                    "message": "API key required. Include X-API-Key header.",
                }
            },
        )

    # Constant-time comparison
    for valid_key in settings.api_key_list:
        if secrets.compare_digest(api_key, valid_key):
            return api_key

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error": {
                "code": "INVALID_API_KEY",
                "message": "Invalid API key.",
            }
        },
    )
