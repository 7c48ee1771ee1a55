"""
Ledger Service - The pending batch of priced bottles.

Entries are added newest-first and never edited; the only destructive
operation is clearing the whole batch.
"""

import logging
import math
import uuid
from datetime import datetime
from typing import List, Optional

from scentvalue.models.ledger import BatchSummary, LedgerEntry
from scentvalue.services.pricing_service import PricingService
from scentvalue.services.weight_parser import resolve_weight
from scentvalue.storage.ledger_store import InMemoryLedgerStore, LedgerStore

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for adding, reading and clearing batch entries."""

    def __init__(
        self,
        store: Optional[LedgerStore] = None,
        pricing: Optional[PricingService] = None,
    ):
        self.store = store if store is not None else InMemoryLedgerStore()
        self.pricing = pricing or PricingService()

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_entry(
        self,
        gross_weight: Optional[float],
        label: Optional[str] = None,
    ) -> Optional[LedgerEntry]:
        """
        Price a gross reading and put it at the front of the batch.

        Returns None (and leaves the ledger untouched) when the weight is
        missing, not finite, or not positive.
        """
        if gross_weight is None or not math.isfinite(gross_weight) or gross_weight <= 0:
            logger.debug(f"Rejected entry with gross weight {gross_weight!r}")
            return None

        quote = self.pricing.quote(gross_weight)
        if not label or not label.strip():
            label = f"Item {len(self.store) + 1}"

        entry = LedgerEntry(
            id=f"le_{uuid.uuid4().hex[:12]}",
            created_at=datetime.utcnow(),
            label=label.strip(),
            gross_weight=gross_weight,
            net_weight=quote.net_weight,
            price=quote.price,
        )
        self.store.prepend(entry)
        logger.info(f"Added {entry.id} '{entry.label}' gross={gross_weight}g price={entry.price}")
        return entry

    def add_expression(
        self,
        expression: str,
        label: Optional[str] = None,
    ) -> Optional[LedgerEntry]:
        """Resolve a typed weight expression and add it."""
        return self.add_entry(resolve_weight(expression), label)

    def clear(self) -> None:
        """Empty the batch. Irreversible."""
        self.store.clear()

    # =========================================================================
    # Queries
    # =========================================================================

    def list_entries(self) -> List[LedgerEntry]:
        """All entries, newest first."""
        return self.store.list()

    def get_entry(self, entry_id: str) -> Optional[LedgerEntry]:
        """Get an entry by ID."""
        for entry in self.store.list():
            if entry.id == entry_id:
                return entry
        return None

    def count(self) -> int:
        return len(self.store)

    def total(self) -> float:
        """Sum of all prices; 0 for an empty batch."""
        return sum((entry.price for entry in self.store.list()), 0.0)

    def summary(self) -> BatchSummary:
        """Entries plus totals and the pricing configuration they were priced under."""
        entries = self.store.list()
        config = self.pricing.config
        return BatchSummary(
            entries=entries,
            count=len(entries),
            total_value=sum((e.price for e in entries), 0.0),
            currency=config.currency,
            tare_grams=config.tare_grams,
            rate_per_gram=config.rate_per_gram,
        )
