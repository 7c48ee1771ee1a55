"""
Ledger Storage

Stores priced entries newest-first. The ledger is session-scoped: nothing is
written to disk, and a restart starts from an empty batch.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, List

from scentvalue.models.ledger import LedgerEntry

logger = logging.getLogger(__name__)


class LedgerStore(ABC):
    """Storage interface for the batch ledger."""

    @abstractmethod
    def prepend(self, entry: LedgerEntry) -> None:
        """Insert an entry at the front (most recent first)."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""

    @abstractmethod
    def list(self) -> List[LedgerEntry]:
        """All entries, newest first."""

    @abstractmethod
    def __len__(self) -> int:
        ...


class InMemoryLedgerStore(LedgerStore):
    """Process-memory ledger."""

    def __init__(self):
        self._entries: Deque[LedgerEntry] = deque()

    def prepend(self, entry: LedgerEntry) -> None:
        self._entries.appendleft(entry)

    def clear(self) -> None:
        logger.info(f"Clearing ledger ({len(self._entries)} entries)")
        self._entries.clear()

    def list(self) -> List[LedgerEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
