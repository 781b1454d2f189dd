"""
Sheet Ledger Event Store — Stock Event Log
============================================
The append-only log of stock events and the in-memory implementation
used by the HTTP adapter and tests.

Rules:
- The ledger engine only READS the log (list_events)
- Validation happens here, at the creation boundary
- Edits and deletes replace log entries; derived balances
  change on the next read, no audit diff is kept
- Snapshots handed out are immutable tuples
- A guard, when given, runs under the write lock against the log
  it is about to change
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import date
from typing import Callable, Iterable, List, Optional, Protocol, Tuple

from core.commands.rejection import RejectionReason
from core.event_store.errors import (
    DuplicateEventError,
    EventNotFoundError,
    InvalidStockEventError,
    MovementRejectedError,
)
from core.primitives.stock_event import EVENT_TYPES_BY_ACTION, StockEvent

logger = logging.getLogger("sheetledger.events")

# guard(candidate, other_events) -> RejectionReason or None
MovementGuard = Callable[[StockEvent, Tuple[StockEvent, ...]], Optional[RejectionReason]]


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════

class StockEventSource(Protocol):
    """Collaborator contract consumed by the ledger engine."""

    def list_events(self) -> Tuple[StockEvent, ...]:
        """Return the current full snapshot of the log."""
        ...  # pragma: no cover

    def append_event(
        self,
        event: StockEvent,
        guard: Optional[MovementGuard] = None,
    ) -> StockEvent:
        """Validate and append one event; return the stored event."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# CREATION-BOUNDARY VALIDATION
# ══════════════════════════════════════════════════════════════

def validate_new_event(event: StockEvent) -> None:
    """
    Reject events the reducer must never see.

    Structural checks (pools, required fields) already ran in the
    event constructors. What remains is the quantity rule.
    """
    if type(event) not in EVENT_TYPES_BY_ACTION.values():
        raise InvalidStockEventError(
            getattr(event, "event_id", "?"),
            f"unsupported event type {type(event).__name__}",
        )
    if event.quantity <= 0:
        raise InvalidStockEventError(
            event.event_id, f"quantity must be positive, got {event.quantity}"
        )


# ══════════════════════════════════════════════════════════════
# IN-MEMORY STORE
# ══════════════════════════════════════════════════════════════

class InMemoryStockEventStore:
    """
    Thread-safe in-memory stock event log.

    Events are kept in append order. Production would back this
    with a database; the engine does not care which.
    """

    def __init__(self, events: Iterable[StockEvent] = ()) -> None:
        self._events: List[StockEvent] = []
        self._lock = threading.Lock()
        for event in events:
            self.append_event(event)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def _index_of(self, event_id: str) -> int:
        for idx, event in enumerate(self._events):
            if event.event_id == event_id:
                return idx
        raise EventNotFoundError(event_id)

    # ── Reads ─────────────────────────────────────────────────

    def list_events(self) -> Tuple[StockEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def get_event(self, event_id: str) -> Optional[StockEvent]:
        with self._lock:
            for event in self._events:
                if event.event_id == event_id:
                    return event
        return None

    # ── Writes ────────────────────────────────────────────────

    def _check_guard(
        self,
        guard: Optional[MovementGuard],
        event: StockEvent,
        others: Tuple[StockEvent, ...],
    ) -> None:
        # Caller holds self._lock.
        if guard is None:
            return
        rejection = guard(event, others)
        if rejection is not None:
            logger.warning(
                f"Stock event {event.event_id} refused by "
                f"{rejection.policy_name}: {rejection.message}"
            )
            raise MovementRejectedError(event.event_id, rejection)

    def append_event(
        self,
        event: StockEvent,
        guard: Optional[MovementGuard] = None,
    ) -> StockEvent:
        try:
            validate_new_event(event)
        except InvalidStockEventError as exc:
            logger.warning(f"Stock event rejected: {exc}")
            raise
        with self._lock:
            if any(e.event_id == event.event_id for e in self._events):
                logger.warning(f"Duplicate stock event rejected: {event.event_id}")
                raise DuplicateEventError(event.event_id)
            self._check_guard(guard, event, tuple(self._events))
            self._events.append(event)
        logger.info(
            f"Stock event appended: {event.event_id} "
            f"{event.action.value} {event.quantity} "
            f"{event.item_key.label} for {event.customer}"
        )
        return event

    def update_event(
        self,
        event_id: str,
        *,
        occurred_on: Optional[date] = None,
        quantity: Optional[int] = None,
        details: Optional[str] = None,
        driver_name: Optional[str] = None,
        vehicle_number: Optional[str] = None,
        guard: Optional[MovementGuard] = None,
    ) -> StockEvent:
        """
        Replace an event with an edited copy.

        Only the fields the edit form exposes can change. Action,
        customer, item and pools are fixed once recorded. The guard
        judges the edited event against the log without its old
        version.
        """
        with self._lock:
            idx = self._index_of(event_id)
            current = self._events[idx]

            metadata_changes = {
                name: value
                for name, value in (
                    ("details", details),
                    ("driver_name", driver_name),
                    ("vehicle_number", vehicle_number),
                )
                if value is not None
            }
            changes = {}
            if occurred_on is not None:
                changes["occurred_on"] = occurred_on
            if quantity is not None:
                changes["quantity"] = quantity

            try:
                if metadata_changes:
                    changes["metadata"] = dataclasses.replace(
                        current.metadata, **metadata_changes
                    )
                updated = dataclasses.replace(current, **changes)
            except ValueError as exc:
                raise InvalidStockEventError(event_id, str(exc)) from exc
            validate_new_event(updated)
            self._check_guard(
                guard,
                updated,
                tuple(self._events[:idx] + self._events[idx + 1:]),
            )
            self._events[idx] = updated

        logger.info(f"Stock event updated: {event_id} ({', '.join(sorted(changes)) or 'no changes'})")
        return updated

    def delete_event(self, event_id: str) -> StockEvent:
        with self._lock:
            idx = self._index_of(event_id)
            removed = self._events.pop(idx)
        logger.info(f"Stock event deleted: {event_id}")
        return removed

    def delete_customer(self, customer: str) -> int:
        """Drop every event of one customer. Returns how many were removed."""
        with self._lock:
            kept = [e for e in self._events if e.customer != customer]
            removed = len(self._events) - len(kept)
            self._events = kept
        logger.info(f"Customer '{customer}' deleted: {removed} stock events removed")
        return removed
