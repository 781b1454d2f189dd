"""
Sheet Ledger Engine — Policies
================================
Validation policies for new stock movements, run before an event
is appended. Policies never raise; they return a RejectionReason
or None.

balance_lookup(customer, item_key) returns the item's current
Balance, or None when the customer never had that item. Without a
lookup every policy passes (optimistic mode).
"""

from __future__ import annotations

from typing import Callable, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.primitives.stock_event import (
    ItemKey,
    ProcessEvent,
    ReceiveEvent,
    ReturnEvent,
    StockEvent,
    StockPool,
    WastageEvent,
)
from engines.sheet_ledger.reducer import Balance

BalanceLookup = Callable[[str, ItemKey], Optional[Balance]]


def drawn_pool(event: StockEvent) -> Optional[StockPool]:
    """The pool a movement takes quantity out of, None for RECEIVE."""
    if isinstance(event, ReceiveEvent):
        return None
    if isinstance(event, (ProcessEvent, WastageEvent)):
        return event.source_pool
    if isinstance(event, ReturnEvent):
        return event.destination_pool
    return None


def known_item_policy(
    event: StockEvent,
    balance_lookup: Optional[BalanceLookup] = None,
) -> Optional[RejectionReason]:
    """Only items already received for this customer can be cut, returned or wasted."""
    if balance_lookup is None or isinstance(event, ReceiveEvent):
        return None

    if balance_lookup(event.customer, event.item_key) is None:
        return RejectionReason(
            code=ReasonCode.UNKNOWN_ITEM,
            message=(
                f"Item {event.item_key.label} has no stock history "
                f"for customer {event.customer}."
            ),
            policy_name="known_item_policy",
        )
    return None


def pool_availability_policy(
    event: StockEvent,
    balance_lookup: Optional[BalanceLookup] = None,
) -> Optional[RejectionReason]:
    """
    Reject movements that draw more than the source pool holds.

    A PROCESS from CUT moves nothing but still may not name more
    sheets than are cut.
    """
    if balance_lookup is None:
        return None

    pool = drawn_pool(event)
    if pool is None:
        return None

    balance = balance_lookup(event.customer, event.item_key)
    available = balance.balance_of(pool) if balance is not None else 0

    if available < event.quantity:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_STOCK,
            message=(
                f"Insufficient {pool.value} stock: {available} available, "
                f"{event.quantity} requested for item {event.item_key.label} "
                f"of customer {event.customer}."
            ),
            policy_name="pool_availability_policy",
        )
    return None


MOVEMENT_POLICIES = (
    known_item_policy,
    pool_availability_policy,
)


def evaluate_movement_policies(
    event: StockEvent,
    balance_lookup: Optional[BalanceLookup] = None,
) -> Optional[RejectionReason]:
    """Run policies in order; the first rejection wins."""
    for policy in MOVEMENT_POLICIES:
        rejection = policy(event, balance_lookup)
        if rejection is not None:
            return rejection
    return None
