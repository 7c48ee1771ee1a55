"""Common types used across the valuation system."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# Constants (process-wide defaults)
# ============================================================================

DEFAULT_TARE_GRAMS = 136.0  # standard empty bottle weight
DEFAULT_RATE_PER_GRAM = 230.0  # TSh per net gram/ml
DEFAULT_CURRENCY = "TSh"


# ============================================================================
# Status Enums
# ============================================================================

class CaptureMode(str, Enum):
    """What an image scan is expected to contain."""
    SINGLE = "single"  # one scale display
    BATCH = "batch"    # a document listing many bottles


class ExportKind(str, Enum):
    """File export formats."""
    XLSX = "xlsx"
    PDF = "pdf"


# ============================================================================
# Common Value Objects
# ============================================================================

class PricingConfig(BaseModel):
    """Tare and rate used for every price calculation."""
    model_config = ConfigDict(frozen=True)

    tare_grams: float = Field(default=DEFAULT_TARE_GRAMS, ge=0)
    rate_per_gram: float = Field(default=DEFAULT_RATE_PER_GRAM, ge=0)
    currency: str = DEFAULT_CURRENCY


class PriceQuote(BaseModel):
    """Net weight and price for a gross reading."""
    gross_weight: float
    net_weight: float
    price: float
