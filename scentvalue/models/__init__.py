"""ScentValue Data Models"""

from scentvalue.models.assistant import (
    AskRequest,
    AssistantReply,
    BatchDocument,
    BatchItem,
    ScanRequest,
    ScanResult,
)
from scentvalue.models.common import (
    CaptureMode,
    ExportKind,
    PriceQuote,
    PricingConfig,
)
from scentvalue.models.ledger import (
    AddEntryRequest,
    BatchSummary,
    LedgerEntry,
    QuoteRequest,
    ResolveRequest,
    ResolveResponse,
)

__all__ = [
    # Common
    "CaptureMode", "ExportKind", "PricingConfig", "PriceQuote",
    # Ledger
    "LedgerEntry", "BatchSummary", "AddEntryRequest", "ResolveRequest", "ResolveResponse", "QuoteRequest",
    # Assistant
    "BatchItem", "BatchDocument", "AskRequest", "AssistantReply", "ScanRequest", "ScanResult",
]
