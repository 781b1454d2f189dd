"""
Sheet Ledger Event Store — Public API
=======================================
The stock event log collaborator: contract, in-memory store, errors.
"""

from core.event_store.errors import (
    DuplicateEventError,
    EventNotFoundError,
    InvalidStockEventError,
    MovementRejectedError,
    StockEventStoreError,
    StoreRejectionCode,
)
from core.event_store.store import (
    InMemoryStockEventStore,
    MovementGuard,
    StockEventSource,
    validate_new_event,
)

__all__ = [
    "StockEventStoreError",
    "InvalidStockEventError",
    "DuplicateEventError",
    "EventNotFoundError",
    "MovementRejectedError",
    "StoreRejectionCode",
    "StockEventSource",
    "InMemoryStockEventStore",
    "MovementGuard",
    "validate_new_event",
]
