"""
Sheet Ledger HTTP API - Framework-Agnostic Handlers
=====================================================
Pure handler functions over contracts and injected dependencies.

Every read takes one snapshot of the event log and derives the
view from it. Writes hand the movement policies (when the
rules enable them) to the store as a guard, which runs them and
the write under one lock.
"""

from __future__ import annotations

import logging
from typing import Any

from core.commands.rejection import ReasonCode
from core.event_store.errors import MovementRejectedError, StockEventStoreError
from core.http_api.contracts import (
    CustomerDeleteHttpRequest,
    DateRangeRequest,
    HistoryReadRequest,
    ItemStockReadRequest,
    StockEventCreateHttpRequest,
    StockEventDeleteHttpRequest,
    StockEventUpdateHttpRequest,
)
from core.http_api.errors import (
    error_response,
    rejection_response,
    store_error_response,
    success_response,
)
from core.primitives.stock_event import stock_event_from_dict
from core.time.windows import DateRangeOption, DateWindow, resolve_date_window
from engines.sheet_ledger.policies import evaluate_movement_policies
from engines.sheet_ledger.running import HistoryOrder
from projections.sheet_stock import (
    balance_lookup_for,
    customer_history,
    movement_stats,
    summarize_customers,
    summarize_item_stock,
)

logger = logging.getLogger("sheetledger.http")


def _read_model_error(message: str, exc: Exception) -> dict[str, Any]:
    logger.exception(message)
    return error_response(
        code=ReasonCode.READ_MODEL_ERROR,
        message=message,
        details={"error_type": type(exc).__name__},
    )


def _resolve_window(period: DateRangeRequest, dependencies) -> DateWindow:
    option = period.date_range
    if option is None:
        # Dates without a range name mean an explicit window.
        if period.start is not None or period.end is not None:
            option = DateRangeOption.CUSTOM
        else:
            option = dependencies.rules.default_date_range
    return resolve_date_window(
        option,
        dependencies.clock.today(),
        start=period.start,
        end=period.end,
    )


# ══════════════════════════════════════════════════════════════
# READS
# ══════════════════════════════════════════════════════════════

def list_customer_summaries(dependencies) -> dict[str, Any]:
    try:
        summaries = summarize_customers(dependencies.event_store.list_events())
    except Exception as exc:
        return _read_model_error("Failed to read customer summaries.", exc)

    return success_response(
        {
            "items": tuple(summary.to_dict() for summary in summaries),
            "count": len(summaries),
        }
    )


def get_item_stock_sheet(
    request: ItemStockReadRequest,
    dependencies,
) -> dict[str, Any]:
    active_only = request.active_only
    if active_only is None:
        active_only = dependencies.rules.stock_sheet_active_only

    try:
        items = summarize_item_stock(
            dependencies.event_store.list_events(),
            request.customer,
            active_only=active_only,
            search=request.search,
        )
    except Exception as exc:
        return _read_model_error("Failed to read item stock sheet.", exc)

    return success_response(
        {
            "customer": request.customer,
            "active_only": active_only,
            "items": tuple(item.to_dict() for item in items),
            "count": len(items),
        }
    )


def get_customer_history(
    request: HistoryReadRequest,
    dependencies,
) -> dict[str, Any]:
    order = HistoryOrder(request.order or dependencies.rules.default_history_order)
    try:
        window = _resolve_window(request.period, dependencies)
    except ValueError as exc:
        return error_response(
            code=ReasonCode.INVALID_REQUEST,
            message=str(exc),
            details={},
        )

    try:
        entries = customer_history(
            dependencies.event_store.list_events(),
            request.customer,
            window=window,
            search=request.search,
            order=order,
        )
    except Exception as exc:
        return _read_model_error("Failed to read customer history.", exc)

    return success_response(
        {
            "customer": request.customer,
            "window": window.to_dict(),
            "order": order.value,
            "items": tuple(entry.to_dict() for entry in entries),
            "count": len(entries),
        }
    )


def get_movement_stats(
    request: DateRangeRequest,
    dependencies,
) -> dict[str, Any]:
    try:
        window = _resolve_window(request, dependencies)
    except ValueError as exc:
        return error_response(
            code=ReasonCode.INVALID_REQUEST,
            message=str(exc),
            details={},
        )

    try:
        stats = movement_stats(dependencies.event_store.list_events(), window)
    except Exception as exc:
        return _read_model_error("Failed to read movement stats.", exc)

    data = stats.to_dict()
    data["window"] = window.to_dict()
    return success_response(data)


# ══════════════════════════════════════════════════════════════
# WRITES
# ══════════════════════════════════════════════════════════════

def _movement_guard(dependencies):
    """Policy check the store runs under its write lock; None when not enforced."""
    if not dependencies.rules.enforce_pool_availability:
        return None

    def guard(event, other_events):
        return evaluate_movement_policies(event, balance_lookup_for(other_events))

    return guard


def _movement_rejected(exc: MovementRejectedError) -> dict[str, Any]:
    logger.warning(
        f"Stock event {exc.event_id} rejected by "
        f"{exc.reason.policy_name}: {exc.reason.message}"
    )
    return rejection_response(exc.reason, extra_details={"event_id": exc.event_id})


def post_stock_event(
    request: StockEventCreateHttpRequest,
    dependencies,
) -> dict[str, Any]:
    """
    Record one stock movement.

    event_id and occurred_on default to a fresh id and the clock's
    today. With enforce_pool_availability on, movements that draw
    more than the pool holds are refused and nothing is written.
    """
    event_data = dict(request.event_data)
    if not event_data.get("event_id"):
        event_data["event_id"] = dependencies.id_provider.new_event_id()
    if not event_data.get("occurred_on"):
        event_data["occurred_on"] = dependencies.clock.today()

    try:
        event = stock_event_from_dict(event_data)
    except (TypeError, ValueError) as exc:
        return error_response(
            code=ReasonCode.INVALID_REQUEST,
            message=str(exc),
            details={},
        )

    try:
        stored = dependencies.event_store.append_event(
            event,
            guard=_movement_guard(dependencies),
        )
    except MovementRejectedError as exc:
        return _movement_rejected(exc)
    except StockEventStoreError as exc:
        return store_error_response(exc)

    return success_response({"event": stored.to_dict()})


def post_stock_event_update(
    request: StockEventUpdateHttpRequest,
    dependencies,
) -> dict[str, Any]:
    try:
        updated = dependencies.event_store.update_event(
            request.event_id,
            occurred_on=request.occurred_on,
            quantity=request.quantity,
            details=request.details,
            driver_name=request.driver_name,
            vehicle_number=request.vehicle_number,
            guard=_movement_guard(dependencies),
        )
    except MovementRejectedError as exc:
        return _movement_rejected(exc)
    except StockEventStoreError as exc:
        return store_error_response(exc)

    return success_response({"event": updated.to_dict()})


def post_stock_event_delete(
    request: StockEventDeleteHttpRequest,
    dependencies,
) -> dict[str, Any]:
    try:
        removed = dependencies.event_store.delete_event(request.event_id)
    except StockEventStoreError as exc:
        return store_error_response(exc)

    return success_response({"deleted_event_id": removed.event_id})


def post_customer_delete(
    request: CustomerDeleteHttpRequest,
    dependencies,
) -> dict[str, Any]:
    removed = dependencies.event_store.delete_customer(request.customer)
    return success_response(
        {
            "customer": request.customer,
            "deleted_events": removed,
        }
    )

