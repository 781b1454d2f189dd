"""
Sheet Ledger Stock Event Primitive — Stock Movement Records
=============================================================
Engine: Core Primitives
Authority: Sheet Ledger Doctrine — Deterministic, Event-Sourced

A stock event is one immutable record of a physical movement of
sheets belonging to a customer. Every balance in the system is
derived from the sequence of these records.

RULES (NON-NEGOTIABLE):
- One event type per action (RECEIVE, PROCESS, RETURN, WASTAGE)
- Item identity is (item_code, item_type)
- Quantities are integers
- Metadata is carried through, never interpreted by reducers
- Positive quantity is enforced where events are created (the store),
  not here, so that any historical log can still be reduced

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Union


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class StockAction(Enum):
    """Kind of physical movement."""
    RECEIVE = "RECEIVE"     # Raw sheets arrive from the customer
    PROCESS = "PROCESS"     # Sheets are cut (RAW → CUT)
    RETURN = "RETURN"       # Sheets leave the yard on a gate pass
    WASTAGE = "WASTAGE"     # Sheets written off without being returned


class StockPool(Enum):
    """Stock accumulator for one item within one customer."""
    RAW = "RAW"     # Received, unprocessed
    CUT = "CUT"     # Processed / output


class ProcessingStatus(Enum):
    """Cutting workflow stage recorded on PROCESS events."""
    SIZES_CONFIRMED = "SIZES_CONFIRMED"
    PRINTED_FOR_CUTTING = "PRINTED_FOR_CUTTING"
    CUTTING_COMPLETED = "CUTTING_COMPLETED"
    NONE = "NONE"


class StockUnit(Enum):
    SHEET = "SHEET"
    PCS = "PCS"


class WastageStatus(Enum):
    NO = "NO"
    YES = "YES"
    PARTIAL = "PARTIAL"


# ══════════════════════════════════════════════════════════════
# ITEM KEY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True, order=True)
class ItemKey:
    """Compound identity of a distinct stock item, e.g. ('S-10mm', 'Steel 10mm')."""
    item_code: str
    item_type: str

    @property
    def label(self) -> str:
        return f"{self.item_code}-{self.item_type}"

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on code or type."""
        q = query.lower()
        return q in self.item_code.lower() or q in self.item_type.lower()


# ══════════════════════════════════════════════════════════════
# METADATA
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EventMetadata:
    """
    Free-form attributes attached to an event.

    evidence_ref is an opaque pointer to a photo or scan of the
    delivery note. driver_name / vehicle_number are the courier
    details printed on a gate pass.
    """
    details: str = ""
    evidence_ref: Optional[str] = None
    referred_by: Optional[str] = None
    unit: Optional[StockUnit] = None
    wastage_status: Optional[WastageStatus] = None
    driver_name: Optional[str] = None
    vehicle_number: Optional[str] = None

    TEXT_FIELDS: ClassVar[tuple] = (
        "evidence_ref",
        "referred_by",
        "driver_name",
        "vehicle_number",
    )

    def __post_init__(self):
        if not isinstance(self.details, str):
            raise ValueError("metadata.details must be a string.")
        for name in self.TEXT_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"metadata.{name} must be a string or null.")

    def to_dict(self) -> dict:
        return {
            "details": self.details,
            "evidence_ref": self.evidence_ref,
            "referred_by": self.referred_by,
            "unit": self.unit.value if self.unit else None,
            "wastage_status": (
                self.wastage_status.value if self.wastage_status else None
            ),
            "driver_name": self.driver_name,
            "vehicle_number": self.vehicle_number,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> EventMetadata:
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("metadata must be an object.")
        unit = data.get("unit")
        wastage_status = data.get("wastage_status")
        return cls(
            details="" if data.get("details") is None else data["details"],
            evidence_ref=data.get("evidence_ref"),
            referred_by=data.get("referred_by"),
            unit=StockUnit(unit) if unit else None,
            wastage_status=WastageStatus(wastage_status) if wastage_status else None,
            driver_name=data.get("driver_name"),
            vehicle_number=data.get("vehicle_number"),
        )


# ══════════════════════════════════════════════════════════════
# EVENT TYPES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class _StockEventBase:
    """
    Fields shared by every stock event.

    Fields:
        event_id:     Opaque unique identifier (same-day tie-break key)
        occurred_on:  Calendar day of the movement (primary ordering key)
        customer:     Owning party
        item_code:    Sheet code, e.g. "S-10mm"
        item_type:    Sheet type, e.g. "Steel 10mm"
        quantity:     Unit count moved
    """
    action: ClassVar[StockAction]

    event_id: str
    occurred_on: date
    customer: str
    item_code: str
    item_type: str
    quantity: int

    def _validate_common(self) -> None:
        if not self.event_id or not isinstance(self.event_id, str):
            raise ValueError("event_id must be non-empty string.")
        if not isinstance(self.occurred_on, date):
            raise ValueError("occurred_on must be a date.")
        if not self.customer or not isinstance(self.customer, str):
            raise ValueError("customer must be non-empty string.")
        if not self.item_code or not isinstance(self.item_code, str):
            raise ValueError("item_code must be non-empty string.")
        if not self.item_type or not isinstance(self.item_type, str):
            raise ValueError("item_type must be non-empty string.")
        if (
            not isinstance(self.quantity, int)
            or isinstance(self.quantity, bool)
            or self.quantity < 0
        ):
            raise ValueError("quantity must be a non-negative integer.")

    @property
    def item_key(self) -> ItemKey:
        return ItemKey(item_code=self.item_code, item_type=self.item_type)

    @property
    def sort_key(self) -> tuple:
        """Chronological order: day first, then event_id as tie-break."""
        return (self.occurred_on, self.event_id)

    def _base_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "occurred_on": self.occurred_on.isoformat(),
            "customer": self.customer,
            "item_code": self.item_code,
            "item_type": self.item_type,
            "action": self.action.value,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class ReceiveEvent(_StockEventBase):
    """Raw sheets received from the customer. Always lands in RAW."""
    action: ClassVar[StockAction] = StockAction.RECEIVE

    metadata: EventMetadata = field(default_factory=EventMetadata)

    def __post_init__(self):
        self._validate_common()

    @property
    def destination_pool(self) -> StockPool:
        return StockPool.RAW

    def to_dict(self) -> dict:
        data = self._base_dict()
        data.update({
            "source_pool": None,
            "destination_pool": StockPool.RAW.value,
            "metadata": self.metadata.to_dict(),
        })
        return data


@dataclass(frozen=True)
class ProcessEvent(_StockEventBase):
    """
    Cutting operation.

    From RAW it moves quantity RAW → CUT. From CUT it is a
    workflow status update on already-cut stock and moves nothing.
    """
    action: ClassVar[StockAction] = StockAction.PROCESS

    source_pool: StockPool = StockPool.RAW
    processing_status: ProcessingStatus = ProcessingStatus.NONE
    metadata: EventMetadata = field(default_factory=EventMetadata)

    def __post_init__(self):
        self._validate_common()
        if not isinstance(self.source_pool, StockPool):
            raise ValueError("source_pool must be StockPool enum.")
        if not isinstance(self.processing_status, ProcessingStatus):
            raise ValueError("processing_status must be ProcessingStatus enum.")

    @property
    def destination_pool(self) -> StockPool:
        return StockPool.CUT

    @property
    def moves_stock(self) -> bool:
        return self.source_pool == StockPool.RAW

    def to_dict(self) -> dict:
        data = self._base_dict()
        data.update({
            "source_pool": self.source_pool.value,
            "destination_pool": StockPool.CUT.value,
            "processing_status": self.processing_status.value,
            "metadata": self.metadata.to_dict(),
        })
        return data


@dataclass(frozen=True)
class ReturnEvent(_StockEventBase):
    """Gate pass: sheets physically leave the yard from the given pool."""
    action: ClassVar[StockAction] = StockAction.RETURN

    destination_pool: StockPool
    metadata: EventMetadata = field(default_factory=EventMetadata)

    def __post_init__(self):
        self._validate_common()
        if not isinstance(self.destination_pool, StockPool):
            raise ValueError("RETURN events require destination_pool (RAW or CUT).")

    def to_dict(self) -> dict:
        data = self._base_dict()
        data.update({
            "source_pool": None,
            "destination_pool": self.destination_pool.value,
            "metadata": self.metadata.to_dict(),
        })
        return data


@dataclass(frozen=True)
class WastageEvent(_StockEventBase):
    """Sheets removed from a pool without being returned."""
    action: ClassVar[StockAction] = StockAction.WASTAGE

    source_pool: StockPool = StockPool.RAW
    metadata: EventMetadata = field(default_factory=EventMetadata)

    def __post_init__(self):
        self._validate_common()
        if not isinstance(self.source_pool, StockPool):
            raise ValueError("source_pool must be StockPool enum.")

    @property
    def destination_pool(self) -> Optional[StockPool]:
        return None

    def to_dict(self) -> dict:
        data = self._base_dict()
        data.update({
            "source_pool": self.source_pool.value,
            "destination_pool": None,
            "metadata": self.metadata.to_dict(),
        })
        return data


StockEvent = Union[ReceiveEvent, ProcessEvent, ReturnEvent, WastageEvent]

EVENT_TYPES_BY_ACTION = {
    StockAction.RECEIVE: ReceiveEvent,
    StockAction.PROCESS: ProcessEvent,
    StockAction.RETURN: ReturnEvent,
    StockAction.WASTAGE: WastageEvent,
}


# ══════════════════════════════════════════════════════════════
# CODEC
# ══════════════════════════════════════════════════════════════

def _parse_pool(value: Any, field_name: str) -> StockPool:
    try:
        return StockPool(value)
    except ValueError as exc:
        raise ValueError(f"{field_name} must be RAW or CUT, got {value!r}.") from exc


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"occurred_on must be an ISO date, got {value!r}.") from exc


def stock_event_from_dict(data: dict) -> StockEvent:
    """
    Build the typed event for data["action"].

    source_pool defaults to RAW for PROCESS and WASTAGE. RETURN
    requires destination_pool. Raises ValueError on anything else
    that does not fit the action.
    """
    try:
        action = StockAction(data["action"])
    except KeyError as exc:
        raise ValueError("action is required.") from exc
    except ValueError as exc:
        raise ValueError(f"Unknown action {data['action']!r}.") from exc

    quantity = data.get("quantity")
    if isinstance(quantity, str) and quantity.strip().isdigit():
        quantity = int(quantity)

    common = dict(
        event_id=data.get("event_id"),
        occurred_on=_parse_date(data.get("occurred_on")),
        customer=data.get("customer"),
        item_code=data.get("item_code"),
        item_type=data.get("item_type"),
        quantity=quantity,
        metadata=EventMetadata.from_dict(data.get("metadata")),
    )

    if action == StockAction.RECEIVE:
        return ReceiveEvent(**common)

    if action == StockAction.PROCESS:
        status = data.get("processing_status") or ProcessingStatus.NONE.value
        try:
            processing_status = ProcessingStatus(status)
        except ValueError as exc:
            raise ValueError(f"Unknown processing_status {status!r}.") from exc
        return ProcessEvent(
            source_pool=_parse_pool(data.get("source_pool") or "RAW", "source_pool"),
            processing_status=processing_status,
            **common,
        )

    if action == StockAction.RETURN:
        destination = data.get("destination_pool")
        if destination is None:
            raise ValueError("RETURN events require destination_pool (RAW or CUT).")
        return ReturnEvent(
            destination_pool=_parse_pool(destination, "destination_pool"),
            **common,
        )

    return WastageEvent(
        source_pool=_parse_pool(data.get("source_pool") or "RAW", "source_pool"),
        **common,
    )
