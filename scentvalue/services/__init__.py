"""ScentValue Services - Business Logic"""

from scentvalue.services.assistant_service import AssistantBackend, OpenAIAssistant, StubAssistant
from scentvalue.services.capture_service import CaptureService
from scentvalue.services.export_service import EmptyLedgerError, ExportService
from scentvalue.services.ledger_service import LedgerService
from scentvalue.services.pricing_service import PricingService
from scentvalue.services.weight_parser import WeightParseError, parse_weight_or_raise, resolve_weight

__all__ = [
    "AssistantBackend",
    "OpenAIAssistant",
    "StubAssistant",
    "CaptureService",
    "ExportService",
    "EmptyLedgerError",
    "LedgerService",
    "PricingService",
    "WeightParseError",
    "parse_weight_or_raise",
    "resolve_weight",
]
