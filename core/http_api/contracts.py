"""
Sheet Ledger HTTP API - Contracts
===================================
Framework-agnostic request/response DTOs for the stock endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from core.config.rules import VALID_HISTORY_ORDERS
from core.time.windows import DateRangeOption


@dataclass(frozen=True)
class ItemStockReadRequest:
    customer: str
    active_only: Optional[bool] = None
    search: Optional[str] = None

    def __post_init__(self):
        if not self.customer or not isinstance(self.customer, str):
            raise ValueError("customer must be a non-empty string.")


@dataclass(frozen=True)
class DateRangeRequest:
    date_range: Optional[DateRangeOption] = None
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.date_range is not None and not isinstance(self.date_range, DateRangeOption):
            raise ValueError("date_range must be DateRangeOption or None.")
        if self.date_range == DateRangeOption.CUSTOM and (
            self.start is None or self.end is None
        ):
            raise ValueError("CUSTOM range requires start and end.")


@dataclass(frozen=True)
class HistoryReadRequest:
    customer: str
    period: DateRangeRequest = field(default_factory=DateRangeRequest)
    search: Optional[str] = None
    order: Optional[str] = None

    def __post_init__(self):
        if not self.customer or not isinstance(self.customer, str):
            raise ValueError("customer must be a non-empty string.")
        if not isinstance(self.period, DateRangeRequest):
            raise ValueError("period must be DateRangeRequest.")
        if self.order is not None and self.order not in VALID_HISTORY_ORDERS:
            raise ValueError(
                f"order must be one of {sorted(VALID_HISTORY_ORDERS)}."
            )


@dataclass(frozen=True)
class StockEventCreateHttpRequest:
    """Raw event fields; event_id is assigned by the server when absent."""
    event_data: dict[str, Any]

    def __post_init__(self):
        if not isinstance(self.event_data, dict):
            raise ValueError("event_data must be an object.")


@dataclass(frozen=True)
class StockEventUpdateHttpRequest:
    event_id: str
    occurred_on: Optional[date] = None
    quantity: Optional[int] = None
    details: Optional[str] = None
    driver_name: Optional[str] = None
    vehicle_number: Optional[str] = None

    def __post_init__(self):
        if not self.event_id or not isinstance(self.event_id, str):
            raise ValueError("event_id must be a non-empty string.")
        if self.quantity is not None and (
            not isinstance(self.quantity, int) or isinstance(self.quantity, bool)
        ):
            raise ValueError("quantity must be an integer.")
        for name in ("details", "driver_name", "vehicle_number"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string.")


@dataclass(frozen=True)
class StockEventDeleteHttpRequest:
    event_id: str

    def __post_init__(self):
        if not self.event_id or not isinstance(self.event_id, str):
            raise ValueError("event_id must be a non-empty string.")


@dataclass(frozen=True)
class CustomerDeleteHttpRequest:
    customer: str

    def __post_init__(self):
        if not self.customer or not isinstance(self.customer, str):
            raise ValueError("customer must be a non-empty string.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
