"""Data storage layer."""

from scentvalue.storage.ledger_store import InMemoryLedgerStore, LedgerStore

__all__ = [
    "LedgerStore",
    "InMemoryLedgerStore",
]
