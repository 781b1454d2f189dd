"""
Sheet Ledger HTTP API - Error Mapping
=======================================
Stable transport error mapping for policy rejections and store failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import RejectionReason
from core.event_store.errors import (
    DuplicateEventError,
    EventNotFoundError,
    InvalidStockEventError,
    StockEventStoreError,
    MovementRejectedError,
    StoreRejectionCode,
)
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def rejection_response(
    reason: RejectionReason,
    *,
    extra_details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    details = {"policy_name": reason.policy_name}
    if extra_details:
        details.update(extra_details)
    return error_response(
        code=reason.code,
        message=reason.message,
        details=details,
    )


def map_store_error(exc: StockEventStoreError) -> HttpApiErrorBody:
    if isinstance(exc, EventNotFoundError):
        code = StoreRejectionCode.EVENT_NOT_FOUND
    elif isinstance(exc, DuplicateEventError):
        code = StoreRejectionCode.DUPLICATE_EVENT
    elif isinstance(exc, MovementRejectedError):
        code = exc.reason.code
    elif isinstance(exc, InvalidStockEventError):
        code = StoreRejectionCode.INVALID_REQUEST
    else:
        code = "STORE_ERROR"
    return HttpApiErrorBody(
        code=code,
        message=str(exc),
        details={"event_id": getattr(exc, "event_id", None)},
    )


def store_error_response(exc: StockEventStoreError) -> dict[str, Any]:
    mapped = map_store_error(exc)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
    )
