"""
Ledger API Routes

Weight resolution, pricing quotes and the pending batch.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_api_key, get_ledger_service, get_pricing_service
from api.middleware.errors import InvalidWeightError, NotFoundError
from scentvalue.models.common import PriceQuote, PricingConfig
from scentvalue.models.ledger import (
    AddEntryRequest,
    BatchSummary,
    LedgerEntry,
    QuoteRequest,
    ResolveRequest,
    ResolveResponse,
)
from scentvalue.services import LedgerService, PricingService, resolve_weight

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_api_key)])


# =============================================================================
# Pricing
# =============================================================================

@router.get("/config", response_model=PricingConfig)
async def get_pricing_config(
    pricing: PricingService = Depends(get_pricing_service),
):
    """Tare, rate and currency in effect."""
    return pricing.config


@router.post("/weights/resolve", response_model=ResolveResponse)
async def resolve(request: ResolveRequest):
    """
    Resolve a weight expression to grams.

    Examples: "1kg136" -> 1136, "1.5kg" -> 1500, "500g+20g" -> 520.
    Invalid expressions return valid=false rather than an error.
    """
    value = resolve_weight(request.expression)
    return ResolveResponse(
        expression=request.expression,
        resolved_weight=value,
        valid=value is not None,
    )


@router.post("/weights/quote", response_model=PriceQuote)
async def quote(
    request: QuoteRequest,
    pricing: PricingService = Depends(get_pricing_service),
):
    """Net weight and price for a gross reading (nothing is stored)."""
    return pricing.quote(request.gross_weight)


# =============================================================================
# Batch
# =============================================================================

@router.get("/ledger", response_model=BatchSummary)
async def get_ledger(
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Pending batch, newest first, with total value."""
    return ledger.summary()


@router.post("/ledger/entries", response_model=LedgerEntry, status_code=201)
async def add_entry(
    request: AddEntryRequest,
    ledger: LedgerService = Depends(get_ledger_service),
):
    """
    Price a reading and add it to the front of the batch.

    Send either a typed `expression` or an already resolved `gross_weight`.
    """
    if request.gross_weight is not None:
        entry = ledger.add_entry(request.gross_weight, request.label)
    else:
        entry = ledger.add_expression(request.expression, request.label)

    if entry is None:
        raise InvalidWeightError(
            "Weight must be a positive number",
            details={"expression": request.expression, "gross_weight": request.gross_weight},
        )
    return entry


@router.get("/ledger/entries/{entry_id}", response_model=LedgerEntry)
async def get_entry(
    entry_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Get a single entry."""
    entry = ledger.get_entry(entry_id)
    if entry is None:
        raise NotFoundError("Entry", entry_id)
    return entry


@router.delete("/ledger", response_model=BatchSummary)
async def clear_ledger(
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Remove every entry. This is permanent."""
    cleared = ledger.count()
    ledger.clear()
    logger.info(f"Ledger cleared ({cleared} entries)")
    return ledger.summary()
