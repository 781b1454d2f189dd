"""
Sheet Ledger Engine — Balance Reducer
=======================================
Pure fold over stock events producing pool balances for one scope
(all of a customer's sheets, or one item of one customer).

RULES (NON-NEGOTIABLE):
- One linear pass, one counter per (pool, direction)
- Counters only ever add; the result does not depend on event order
- RAW and CUT balances are clamped at zero when reported
- PROCESS moves quantity only when drawn from RAW; from CUT it
  is a status update
- No clock, no I/O, no state between calls

Pool arithmetic:
    RAW accumulated = received - processed - returned_raw - wastage_raw
    CUT accumulated = processed - returned_cut - wastage_cut
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import reduce
from typing import Dict, Iterable, Tuple

from core.primitives.stock_event import (
    ItemKey,
    ProcessEvent,
    ReceiveEvent,
    ReturnEvent,
    StockEvent,
    StockPool,
    WastageEvent,
)


# ══════════════════════════════════════════════════════════════
# POOL EFFECT
# ══════════════════════════════════════════════════════════════

def pool_deltas(event: StockEvent) -> Tuple[int, int]:
    """
    Effect of one event on the (RAW, CUT) pools, unclamped.

    Shared by the aggregate fold and the running-balance fold so
    both apply exactly the same update rules.
    """
    qty = event.quantity
    if isinstance(event, ReceiveEvent):
        return qty, 0
    if isinstance(event, ProcessEvent):
        if event.moves_stock:
            return -qty, qty
        return 0, 0
    if isinstance(event, ReturnEvent):
        if event.destination_pool == StockPool.CUT:
            return 0, -qty
        return -qty, 0
    if isinstance(event, WastageEvent):
        if event.source_pool == StockPool.CUT:
            return 0, -qty
        return -qty, 0
    return 0, 0


# ══════════════════════════════════════════════════════════════
# BALANCE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Balance:
    """
    Cumulative counters and derived pool balances for one scope.

    Immutable: apply() returns a new Balance, so the fold threads
    a local accumulator and nothing can drift from the log.
    """
    total_received: int = 0
    total_processed: int = 0    # PROCESS drawn from RAW only
    returned_raw: int = 0
    returned_cut: int = 0
    wastage_raw: int = 0
    wastage_cut: int = 0

    # ── Unclamped pool totals ─────────────────────────────────

    @property
    def raw_accumulated(self) -> int:
        return (
            self.total_received
            - self.total_processed
            - self.returned_raw
            - self.wastage_raw
        )

    @property
    def cut_accumulated(self) -> int:
        return self.total_processed - self.returned_cut - self.wastage_cut

    # ── Reported balances (clamped) ───────────────────────────

    @property
    def balance_raw(self) -> int:
        return max(0, self.raw_accumulated)

    @property
    def balance_cut(self) -> int:
        return max(0, self.cut_accumulated)

    @property
    def total_on_site(self) -> int:
        return self.balance_raw + self.balance_cut

    @property
    def total_returned(self) -> int:
        return self.returned_raw + self.returned_cut

    @property
    def has_activity(self) -> bool:
        return self.total_on_site > 0 or self.total_received > 0

    def balance_of(self, pool: StockPool) -> int:
        return self.balance_raw if pool == StockPool.RAW else self.balance_cut

    def apply(self, event: StockEvent) -> Balance:
        """Return the balance after one more event."""
        qty = event.quantity

        if isinstance(event, ReceiveEvent):
            return dataclasses.replace(
                self, total_received=self.total_received + qty
            )

        if isinstance(event, ProcessEvent):
            if not event.moves_stock:
                return self
            return dataclasses.replace(
                self, total_processed=self.total_processed + qty
            )

        if isinstance(event, ReturnEvent):
            if event.destination_pool == StockPool.CUT:
                return dataclasses.replace(
                    self, returned_cut=self.returned_cut + qty
                )
            return dataclasses.replace(self, returned_raw=self.returned_raw + qty)

        if isinstance(event, WastageEvent):
            if event.source_pool == StockPool.CUT:
                return dataclasses.replace(self, wastage_cut=self.wastage_cut + qty)
            return dataclasses.replace(self, wastage_raw=self.wastage_raw + qty)

        return self

    def to_dict(self) -> dict:
        return {
            "total_received": self.total_received,
            "total_processed": self.total_processed,
            "returned_raw": self.returned_raw,
            "returned_cut": self.returned_cut,
            "wastage_raw": self.wastage_raw,
            "wastage_cut": self.wastage_cut,
            "balance_raw": self.balance_raw,
            "balance_cut": self.balance_cut,
            "total_on_site": self.total_on_site,
        }


# ══════════════════════════════════════════════════════════════
# REDUCERS
# ══════════════════════════════════════════════════════════════

def reduce_balance(events: Iterable[StockEvent]) -> Balance:
    """Fold any collection of events (already scoped) into one Balance."""
    return reduce(lambda balance, event: balance.apply(event), events, Balance())


def events_for_customer(
    events: Iterable[StockEvent], customer: str
) -> Tuple[StockEvent, ...]:
    return tuple(e for e in events if e.customer == customer)


def reduce_by_item(events: Iterable[StockEvent]) -> Dict[ItemKey, Balance]:
    """
    Group by (item_code, item_type) and reduce each group.

    Callers scope the events to one customer first. Every item seen
    in the input gets an entry, including items whose counters all
    stay at zero.
    """
    balances: Dict[ItemKey, Balance] = {}
    for event in events:
        key = event.item_key
        balances[key] = balances.get(key, Balance()).apply(event)
    return balances


def reduce_by_customer(events: Iterable[StockEvent]) -> Dict[str, Balance]:
    balances: Dict[str, Balance] = {}
    for event in events:
        balances[event.customer] = balances.get(event.customer, Balance()).apply(event)
    return balances
