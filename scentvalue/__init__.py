"""
ScentValue Core Package

Weight parsing, pricing, batch ledger, exports and image capture for perfume
inventory valuation. No framework dependencies (Streamlit, FastAPI) in this package.
"""

__version__ = "1.0.0"

from scentvalue.models.common import PriceQuote, PricingConfig
from scentvalue.models.ledger import BatchSummary, LedgerEntry
from scentvalue.services.ledger_service import LedgerService
from scentvalue.services.weight_parser import resolve_weight

__all__ = [
    "PricingConfig",
    "PriceQuote",
    "LedgerEntry",
    "BatchSummary",
    "LedgerService",
    "resolve_weight",
]
