"""
Sheet Ledger HTTP API - Dependencies
======================================
Injected providers for non-deterministic metadata and handler wiring.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Protocol

from core.config.rules import LedgerRules
from core.event_store.store import InMemoryStockEventStore
from core.time.clock import Clock


class IdProvider(Protocol):
    def new_event_id(self) -> str:
        ...


class UuidIdProvider:
    """
    Random event ids.

    Random ids give same-day events an arbitrary (but stable)
    order in the running-balance history.
    """

    def new_event_id(self) -> str:
        return uuid.uuid4().hex


@dataclass(frozen=True)
class HttpApiDependencies:
    event_store: InMemoryStockEventStore
    rules: LedgerRules
    id_provider: IdProvider
    clock: Clock
