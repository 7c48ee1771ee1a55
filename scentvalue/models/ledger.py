"""
Batch Ledger Models

Priced entries awaiting export, plus request/response shapes for the ledger API.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LedgerEntry(BaseModel):
    """A single priced bottle. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    label: str
    gross_weight: float = Field(..., gt=0, description="Scale reading in grams, tare included")
    net_weight: float = Field(..., ge=0, description="Gross minus tare, never negative")
    price: float = Field(..., ge=0)


class BatchSummary(BaseModel):
    """Current ledger contents with aggregate totals."""
    entries: List[LedgerEntry] = Field(default_factory=list, description="Newest first")
    count: int = 0
    total_value: float = 0.0
    currency: str
    tare_grams: float
    rate_per_gram: float


class AddEntryRequest(BaseModel):
    """Request to add an entry from either a raw expression or a resolved weight."""
    expression: Optional[str] = Field(default=None, description="e.g. '1kg136', '500g+20g'")
    gross_weight: Optional[float] = None
    label: Optional[str] = None

    @model_validator(mode="after")
    def check_weight_source(self):
        if self.expression is None and self.gross_weight is None:
            raise ValueError("Provide either 'expression' or 'gross_weight'")
        return self


class ResolveRequest(BaseModel):
    """Weight expression to resolve."""
    expression: str = ""


class ResolveResponse(BaseModel):
    """Result of resolving a weight expression."""
    expression: str
    resolved_weight: Optional[float] = None
    valid: bool


class QuoteRequest(BaseModel):
    """Gross weight to price."""
    gross_weight: float
