"""
API Dependencies

Dependency injection for services. One ledger per process; it lives as long
as the server does.
"""

import logging
from functools import lru_cache

from fastapi import Depends

from api.config import get_settings
from scentvalue.services import (
    AssistantBackend,
    CaptureService,
    ExportService,
    LedgerService,
    OpenAIAssistant,
    PricingService,
    StubAssistant,
)
from scentvalue.storage import InMemoryLedgerStore

# Re-export verify_api_key as get_api_key
from api.middleware.auth import verify_api_key as get_api_key

logger = logging.getLogger(__name__)


@lru_cache()
def get_pricing_service() -> PricingService:
    """Get singleton pricing service."""
    return PricingService(get_settings().pricing)


@lru_cache()
def get_ledger_service() -> LedgerService:
    """Get singleton ledger service."""
    return LedgerService(store=InMemoryLedgerStore(), pricing=get_pricing_service())


@lru_cache()
def get_export_service() -> ExportService:
    """Get singleton export service."""
    return ExportService(get_settings().pricing)


@lru_cache()
def get_assistant() -> AssistantBackend:
    """
    Get singleton assistant.

    Uses OpenAI when OPENAI_API_KEY is configured, otherwise a stub that
    answers deterministically and recognises nothing.
    """
    settings = get_settings()
    if settings.openai_api_key:
        return OpenAIAssistant(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            config=settings.pricing,
        )
    logger.warning("No OpenAI key - assistant running in stub mode")
    return StubAssistant(answer="The assistant is not configured. Set OPENAI_API_KEY to enable it.")


def get_capture_service(
    assistant: AssistantBackend = Depends(get_assistant),
    ledger: LedgerService = Depends(get_ledger_service),
) -> CaptureService:
    """Capture service bound to the current assistant and ledger."""
    return CaptureService(assistant=assistant, ledger=ledger)


__all__ = [
    "get_api_key",
    "get_pricing_service",
    "get_ledger_service",
    "get_export_service",
    "get_assistant",
    "get_capture_service",
]
