"""
Sheet Ledger Projections — Sheet Stock Read Views
====================================================
Read-only views over the stock event log, consumed by the
dashboard and the HTTP API.

Views:
- Customer summary   — one rollup per customer
- Item stock sheet   — one Balance per (item_code, item_type)
- Customer history   — running-balance trace with display filters
- Movement stats     — sheets in / out over a date window

Every view is recomputed from the snapshot it is given. There is
no cached "current balance" that could drift from the log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from core.primitives.stock_event import (
    ItemKey,
    ReceiveEvent,
    ReturnEvent,
    StockEvent,
    StockPool,
    WastageEvent,
)
from core.time.windows import DateWindow, filter_by_date
from engines.sheet_ledger.reducer import (
    Balance,
    events_for_customer,
    reduce_by_customer,
    reduce_by_item,
)
from engines.sheet_ledger.running import (
    HistoryEntry,
    HistoryOrder,
    order_history,
    project_history,
)


# ══════════════════════════════════════════════════════════════
# CUSTOMER SUMMARY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CustomerSummary:
    """
    Rollup of all sheets held for one customer.

    total_cut is the UNCLAMPED cut-pool total and can go negative
    when more cut sheets were returned or wasted than were ever
    produced. Item-level balance_cut is clamped; this one is not.
    Both are kept as recorded.
    """
    customer: str
    balance: Balance

    @property
    def total_received(self) -> int:
        return self.balance.total_received

    @property
    def total_cut(self) -> int:
        return self.balance.cut_accumulated

    @property
    def balance_raw(self) -> int:
        return self.balance.balance_raw

    @property
    def total_returned(self) -> int:
        return self.balance.total_returned

    @property
    def total_balance(self) -> int:
        """Headline figure: raw on hand plus everything cut and not yet gone."""
        return self.balance_raw + self.total_cut

    def to_dict(self) -> dict:
        data = self.balance.to_dict()
        data.update({
            "customer": self.customer,
            "total_cut": self.total_cut,
            "total_returned": self.total_returned,
            "total_balance": self.total_balance,
        })
        return data


def list_customers(events: Iterable[StockEvent]) -> List[str]:
    return sorted({e.customer for e in events})


def summarize_customers(events: Iterable[StockEvent]) -> List[CustomerSummary]:
    """One summary per customer that appears in the log, sorted by name."""
    balances = reduce_by_customer(events)
    return [
        CustomerSummary(customer=customer, balance=balances[customer])
        for customer in sorted(balances)
    ]


# ══════════════════════════════════════════════════════════════
# ITEM STOCK SHEET
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StockItem:
    """Pool breakdown of one item held for one customer."""
    customer: str
    item: ItemKey
    balance: Balance

    @property
    def key(self) -> str:
        return self.item.label

    @property
    def is_active(self) -> bool:
        return self.balance.has_activity

    def to_dict(self) -> dict:
        data = self.balance.to_dict()
        data.update({
            "customer": self.customer,
            "key": self.key,
            "item_code": self.item.item_code,
            "item_type": self.item.item_type,
        })
        return data


def summarize_item_stock(
    events: Iterable[StockEvent],
    customer: str,
    *,
    active_only: bool = False,
    search: Optional[str] = None,
) -> List[StockItem]:
    """
    Per-item balances for one customer, sorted by code then type.

    The unfiltered sheet lists every item the customer ever had,
    including all-zero ones (audit / export). active_only keeps
    items with stock on site or anything received.
    """
    balances = reduce_by_item(events_for_customer(events, customer))
    items = [
        StockItem(customer=customer, item=key, balance=balances[key])
        for key in sorted(balances)
    ]
    if active_only:
        items = [item for item in items if item.is_active]
    if search:
        items = [item for item in items if item.item.matches(search)]
    return items


def available_quantity(
    events: Iterable[StockEvent],
    customer: str,
    item: ItemKey,
    pool: StockPool,
) -> int:
    """Clamped balance of one pool for one item; 0 for unknown items."""
    balances = reduce_by_item(events_for_customer(events, customer))
    balance = balances.get(item)
    if balance is None:
        return 0
    return balance.balance_of(pool)


def balance_lookup_for(events: Iterable[StockEvent]):
    """
    Build a (customer, item) -> Balance lookup over one snapshot.

    Returns None for items the customer never had. Used by the
    movement policies.
    """
    snapshot = tuple(events)

    def _lookup(customer: str, item: ItemKey) -> Optional[Balance]:
        return reduce_by_item(events_for_customer(snapshot, customer)).get(item)

    return _lookup


# ══════════════════════════════════════════════════════════════
# CUSTOMER HISTORY
# ══════════════════════════════════════════════════════════════

def _history_matches(entry: HistoryEntry, query: str) -> bool:
    event = entry.event
    if event.item_key.matches(query):
        return True
    return query.lower() in (event.metadata.details or "").lower()


def customer_history(
    events: Iterable[StockEvent],
    customer: str,
    *,
    window: Optional[DateWindow] = None,
    search: Optional[str] = None,
    order: HistoryOrder = HistoryOrder.CHRONOLOGICAL,
) -> List[HistoryEntry]:
    """
    Running-balance history for display.

    The fold always runs over the customer's full history first;
    the date window, text search and ordering only pick and arrange
    rows afterwards, so balance_after is the same on every screen.
    """
    entries = project_history(events, customer)
    entries = filter_by_date(entries, window, lambda e: e.event.occurred_on)
    if search:
        entries = [e for e in entries if _history_matches(e, search)]
    return order_history(entries, order)


# ══════════════════════════════════════════════════════════════
# MOVEMENT STATS (dashboard)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MovementStats:
    """Sheets received vs. sheets gone (returned or wasted) in a window."""
    sheets_in: int = 0
    sheets_out: int = 0

    @property
    def net(self) -> int:
        return self.sheets_in - self.sheets_out

    def to_dict(self) -> dict:
        return {
            "sheets_in": self.sheets_in,
            "sheets_out": self.sheets_out,
            "net": self.net,
        }


def movement_stats(
    events: Iterable[StockEvent],
    window: Optional[DateWindow] = None,
) -> MovementStats:
    sheets_in = 0
    sheets_out = 0
    for event in filter_by_date(events, window, lambda e: e.occurred_on):
        if isinstance(event, ReceiveEvent):
            sheets_in += event.quantity
        elif isinstance(event, (ReturnEvent, WastageEvent)):
            sheets_out += event.quantity
    return MovementStats(sheets_in=sheets_in, sheets_out=sheets_out)


__all__ = [
    "CustomerSummary",
    "StockItem",
    "MovementStats",
    "list_customers",
    "summarize_customers",
    "summarize_item_stock",
    "available_quantity",
    "balance_lookup_for",
    "customer_history",
    "movement_stats",
]
