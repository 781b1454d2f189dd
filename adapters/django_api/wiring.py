"""
Sheet Ledger Django Adapter Wiring
====================================
Constructs HttpApiDependencies for local/staging live runs.

This module is adapter-only glue:
- no core contract changes
- ledger rules come from settings.SHEETLEDGER
- in-memory event log, optionally seeded with the demo yard
"""

from __future__ import annotations

import logging
import threading
from datetime import date

from django.conf import settings

from core.config.rules import LedgerRules, ledger_rules_from_mapping
from core.event_store.store import InMemoryStockEventStore
from core.http_api.dependencies import HttpApiDependencies, UuidIdProvider
from core.primitives.stock_event import (
    EventMetadata,
    ProcessEvent,
    ProcessingStatus,
    ReceiveEvent,
    ReturnEvent,
    StockEvent,
    StockPool,
)
from core.time.clock import get_default_clock

logger = logging.getLogger("sheetledger.adapters")

DEMO_CUSTOMER_ABC = "ABC Corp"
DEMO_CUSTOMER_XYZ = "XYZ Ltd"

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def demo_stock_events() -> tuple[StockEvent, ...]:
    """Small yard log used for local runs and smoke checks."""
    return (
        ReceiveEvent(
            event_id="TRX-001",
            occurred_on=date(2023, 10, 10),
            customer=DEMO_CUSTOMER_ABC,
            item_code="S-10mm",
            item_type="Steel 10mm",
            quantity=100,
            metadata=EventMetadata(details="Initial Batch"),
        ),
        ProcessEvent(
            event_id="TRX-002",
            occurred_on=date(2023, 10, 12),
            customer=DEMO_CUSTOMER_ABC,
            item_code="S-10mm",
            item_type="Steel 10mm",
            quantity=20,
            processing_status=ProcessingStatus.SIZES_CONFIRMED,
            metadata=EventMetadata(details="Batch 1 Prep"),
        ),
        ReceiveEvent(
            event_id="TRX-003",
            occurred_on=date(2023, 10, 14),
            customer=DEMO_CUSTOMER_XYZ,
            item_code="A-5mm",
            item_type="Acrylic 5mm",
            quantity=50,
            metadata=EventMetadata(details="Urgent Order"),
        ),
        ReturnEvent(
            event_id="TRX-004",
            occurred_on=date(2023, 10, 15),
            customer=DEMO_CUSTOMER_ABC,
            item_code="S-10mm",
            item_type="Steel 10mm",
            quantity=10,
            destination_pool=StockPool.CUT,
            metadata=EventMetadata(
                details="Gate Pass #501",
                driver_name="John Doe",
                vehicle_number="KA-01-9999",
            ),
        ),
    )


def _rules_from_settings() -> LedgerRules:
    return ledger_rules_from_mapping(getattr(settings, "SHEETLEDGER", None))


def _create_dependencies() -> HttpApiDependencies:
    rules = _rules_from_settings()
    seed = demo_stock_events() if rules.seed_demo_data else ()
    store = InMemoryStockEventStore(seed)
    logger.info(
        f"Sheet ledger wired: {len(store)} seeded events, "
        f"enforce_pool_availability={rules.enforce_pool_availability}"
    )
    return HttpApiDependencies(
        event_store=store,
        rules=rules,
        id_provider=UuidIdProvider(),
        clock=get_default_clock(),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def install_dependencies(dependencies: HttpApiDependencies) -> None:
    """Replace the adapter wiring (tests, embedded runs)."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = dependencies


def reset_dependencies() -> None:
    """Drop the wiring; the next request builds it again from settings."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
