"""Health check endpoints."""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.config import Settings, get_settings
from api.dependencies import get_ledger_service
from scentvalue.services import LedgerService

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic liveness check.

    Returns 200 if the service is running.
    """
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat() + "Z"
    }


@router.get("/health/ready")
async def readiness_check(
    settings: Settings = Depends(get_settings),
    ledger: LedgerService = Depends(get_ledger_service),
) -> Dict[str, Any]:
    """
    Readiness check.

    Checks:
    - Ledger is reachable
    - OpenAI API (if configured)
    """
    checks: Dict[str, Dict[str, Any]] = {}

    try:
        checks["ledger"] = {"status": "ok", "entries": ledger.count()}
    except Exception as e:
        checks["ledger"] = {"status": "error", "message": str(e)}

    if settings.openai_api_key:
        checks["openai"] = {"status": "configured"}
    else:
        checks["openai"] = {"status": "not_configured"}

    all_ok = all(
        c.get("status") in ("ok", "configured", "not_configured")
        for c in checks.values()
    )

    return {
        "status": "ready" if all_ok else "degraded",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "version": settings.app_version,
        "checks": checks
    }


@router.get("/health/info")
async def service_info(
    settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    """Return service information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": "development" if settings.debug else "production",
    }
