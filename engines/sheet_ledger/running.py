"""
Sheet Ledger Engine — Running-Balance Projector
=================================================
Annotates each of a customer's events with the customer's total
on-site quantity as of and including that event. Used for the
history / audit trail.

Ordering:
    (occurred_on ASC, event_id ASC)

event_id is only a stable tie-break for events on the same day.
It is not a sequence number: if ids are not assigned in creation
order, same-day running totals follow id order, not real-world order.

Running pool totals are NOT clamped. A row may show a negative
balance_after when the log holds more exits than entries.

balance_after is fixed during the fold. Re-sorting or filtering
entries for display afterwards never recomputes it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from core.primitives.stock_event import StockEvent
from engines.sheet_ledger.reducer import events_for_customer, pool_deltas


class HistoryOrder(Enum):
    CHRONOLOGICAL = "CHRONOLOGICAL"
    NEWEST_FIRST = "NEWEST_FIRST"
    ITEM_ASC = "ITEM_ASC"   # by item code then type; chronological within an item


@dataclass(frozen=True)
class HistoryEntry:
    """One event plus the running pool totals right after it."""
    event: StockEvent
    running_raw: int
    running_cut: int

    @property
    def balance_after(self) -> int:
        return self.running_raw + self.running_cut

    def to_dict(self) -> dict:
        data = self.event.to_dict()
        data["balance_after"] = self.balance_after
        return data


def chronological(events: Iterable[StockEvent]) -> List[StockEvent]:
    return sorted(events, key=lambda e: e.sort_key)


def running_balances(events: Iterable[StockEvent]) -> List[HistoryEntry]:
    """
    Fold already-scoped events in chronological order.

    Each entry carries prior running totals plus this event's effect.
    """
    entries: List[HistoryEntry] = []
    running_raw = 0
    running_cut = 0
    for event in chronological(events):
        raw_delta, cut_delta = pool_deltas(event)
        running_raw += raw_delta
        running_cut += cut_delta
        entries.append(HistoryEntry(
            event=event,
            running_raw=running_raw,
            running_cut=running_cut,
        ))
    return entries


def project_history(events: Iterable[StockEvent], customer: str) -> List[HistoryEntry]:
    """Chronological history of one customer with balance_after on every row."""
    return running_balances(events_for_customer(events, customer))


def order_history(
    entries: Iterable[HistoryEntry],
    order: HistoryOrder = HistoryOrder.CHRONOLOGICAL,
) -> List[HistoryEntry]:
    """
    Re-sort entries for presentation.

    Input is expected in chronological order (as project_history
    returns it); ITEM_ASC relies on sort stability to keep each
    item's rows chronological.
    """
    ordered = list(entries)
    if order == HistoryOrder.NEWEST_FIRST:
        ordered.reverse()
    elif order == HistoryOrder.ITEM_ASC:
        ordered.sort(key=lambda e: (e.event.item_code, e.event.item_type))
    return ordered
