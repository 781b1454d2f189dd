"""
Sheet Ledger Core Primitives — Stock Event Building Blocks
============================================================
Primitives are the shared building blocks every ledger layer consumes:

- Pure Python (no Django dependency)
- Immutable (frozen dataclasses)
- Deterministic (same input → same output)
- Event-sourced (balances derived from events only)

Primitives:
    stock_event — RECEIVE / PROCESS / RETURN / WASTAGE movement records
"""

from core.primitives.stock_event import (
    EVENT_TYPES_BY_ACTION,
    EventMetadata,
    ItemKey,
    ProcessEvent,
    ProcessingStatus,
    ReceiveEvent,
    ReturnEvent,
    StockAction,
    StockEvent,
    StockPool,
    StockUnit,
    WastageEvent,
    WastageStatus,
    stock_event_from_dict,
)

__all__ = [
    "EVENT_TYPES_BY_ACTION",
    "EventMetadata",
    "ItemKey",
    "ProcessEvent",
    "ProcessingStatus",
    "ReceiveEvent",
    "ReturnEvent",
    "StockAction",
    "StockEvent",
    "StockPool",
    "StockUnit",
    "WastageEvent",
    "WastageStatus",
    "stock_event_from_dict",
]
