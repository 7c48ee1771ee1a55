"""
Assistant and Capture Models

Shapes exchanged with the AI service and returned from image scans.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from scentvalue.models.common import CaptureMode
from scentvalue.models.ledger import LedgerEntry


class BatchItem(BaseModel):
    """One line recognised on a batch document."""
    name: str = "Item #"
    weight: float


class BatchDocument(BaseModel):
    """Structured output requested from the vision model."""
    items: List[BatchItem] = Field(default_factory=list)


class AskRequest(BaseModel):
    """Free-form question for the assistant."""
    query: str = Field(..., min_length=1)


class AssistantReply(BaseModel):
    """Advisory text from the assistant."""
    query: str
    answer: str
    answered_at: datetime = Field(default_factory=datetime.utcnow)


class ScanRequest(BaseModel):
    """Base64 image scan request (data URL prefix allowed)."""
    image_base64: str = Field(..., min_length=1)
    mode: CaptureMode = CaptureMode.SINGLE


class ScanResult(BaseModel):
    """Outcome of processing a captured image."""
    mode: CaptureMode
    weight: Optional[float] = Field(default=None, description="Detected gross weight (single mode)")
    items: List[BatchItem] = Field(default_factory=list)
    added: List[LedgerEntry] = Field(default_factory=list, description="Entries created (batch mode)")
    message: str
    success: bool = True
