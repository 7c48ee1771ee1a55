"""API Routers"""

from api.routers import assistant, capture, exports, health, ledger

__all__ = ["assistant", "capture", "exports", "health", "ledger"]
