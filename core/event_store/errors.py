"""
Sheet Ledger Event Store — Errors
===================================
Error types raised at the event-creation boundary.
Reducers never raise these: they assume validated input.
"""


class StockEventStoreError(Exception):
    """Base error for stock event store operations."""
    pass


class InvalidStockEventError(StockEventStoreError):
    """Event rejected before it reached the log."""

    def __init__(self, event_id: str, reason: str):
        self.event_id = event_id
        self.reason = reason
        super().__init__(f"Stock event '{event_id}' rejected: {reason}")


class DuplicateEventError(StockEventStoreError):
    """An event with the same event_id is already in the log."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Stock event '{event_id}' already exists.")


class EventNotFoundError(StockEventStoreError):
    """No event with this event_id is in the log."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Stock event '{event_id}' not found.")


class StoreRejectionCode:
    """Transport-facing codes for store failures."""

    INVALID_REQUEST = "INVALID_REQUEST"
    DUPLICATE_EVENT = "DUPLICATE_EVENT"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"


class MovementRejectedError(StockEventStoreError):
    """A guard refused the event; reason is the RejectionReason it returned."""

    def __init__(self, event_id: str, reason):
        self.event_id = event_id
        self.reason = reason
        super().__init__(reason.message)
