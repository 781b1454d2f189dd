"""
Sheet Ledger Django Adapter Views
===================================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    CustomerDeleteHttpRequest,
    DateRangeRequest,
    HistoryReadRequest,
    ItemStockReadRequest,
    StockEventCreateHttpRequest,
    StockEventDeleteHttpRequest,
    StockEventUpdateHttpRequest,
)
from core.http_api.errors import error_response
from core.http_api.handlers import (
    get_customer_history,
    get_item_stock_sheet,
    get_movement_stats,
    list_customer_summaries,
    post_customer_delete,
    post_stock_event,
    post_stock_event_delete,
    post_stock_event_update,
)
from core.time.windows import DateRangeOption

_ERROR_STATUS = {
    "INVALID_REQUEST": 400,
    "EVENT_NOT_FOUND": 404,
    "DUPLICATE_EVENT": 409,
    "INSUFFICIENT_STOCK": 409,
    "UNKNOWN_ITEM": 409,
    "METHOD_NOT_ALLOWED": 405,
    "READ_MODEL_ERROR": 500,
}


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _json_payload(payload: dict[str, Any]) -> JsonResponse:
    status = 200
    if not payload.get("ok"):
        status = _ERROR_STATUS.get(payload["error"]["code"], 400)
    return JsonResponse(payload, status=status)


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _parse_optional_date(value: Any, field_name: str) -> date | None:
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO date (YYYY-MM-DD).") from exc


def _parse_optional_bool(value: Any, field_name: str) -> bool | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("1", "true", "yes"):
        return True
    if lowered in ("0", "false", "no"):
        return False
    raise ValueError(f"{field_name} must be true or false.")


def _parse_optional_int(value: Any, field_name: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be an integer.") from exc


def _date_range_from_query(request: HttpRequest) -> DateRangeRequest:
    raw_range = request.GET.get("range")
    date_range = None
    if raw_range:
        try:
            date_range = DateRangeOption(raw_range.upper())
        except ValueError as exc:
            raise ValueError(
                f"range must be one of {[option.value for option in DateRangeOption]}."
            ) from exc
    return DateRangeRequest(
        date_range=date_range,
        start=_parse_optional_date(request.GET.get("start"), "start"),
        end=_parse_optional_date(request.GET.get("end"), "end"),
    )


def _dispatch_read(read_handler, contract_factory, request: HttpRequest) -> JsonResponse:
    try:
        contract = contract_factory(request)
    except (ValueError, KeyError) as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)

    payload = read_handler(contract, build_dependencies())
    return _json_payload(payload)


def _dispatch_write(write_handler, contract_factory, request: HttpRequest) -> JsonResponse:
    try:
        body = _parse_json_body(request)
        contract = contract_factory(body)
    except (ValueError, KeyError) as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)

    payload = write_handler(contract, build_dependencies())
    return _json_payload(payload)


# ══════════════════════════════════════════════════════════════
# READ VIEWS
# ══════════════════════════════════════════════════════════════

@csrf_exempt
def customers_list_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _json_payload(list_customer_summaries(build_dependencies()))


@csrf_exempt
def customer_items_view(request: HttpRequest, customer: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(
        get_item_stock_sheet,
        lambda req: ItemStockReadRequest(
            customer=customer,
            active_only=_parse_optional_bool(req.GET.get("active_only"), "active_only"),
            search=req.GET.get("search") or None,
        ),
        request,
    )


@csrf_exempt
def customer_history_view(request: HttpRequest, customer: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(
        get_customer_history,
        lambda req: HistoryReadRequest(
            customer=customer,
            period=_date_range_from_query(req),
            search=req.GET.get("search") or None,
            order=(req.GET.get("order") or "").upper() or None,
        ),
        request,
    )


@csrf_exempt
def movements_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch_read(get_movement_stats, _date_range_from_query, request)


# ══════════════════════════════════════════════════════════════
# WRITE VIEWS
# ══════════════════════════════════════════════════════════════

@csrf_exempt
def stock_events_create_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_stock_event,
        lambda body: StockEventCreateHttpRequest(event_data=body),
        request,
    )


@csrf_exempt
def stock_event_update_view(request: HttpRequest, event_id: str) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_stock_event_update,
        lambda body: StockEventUpdateHttpRequest(
            event_id=event_id,
            occurred_on=_parse_optional_date(body.get("occurred_on"), "occurred_on"),
            quantity=_parse_optional_int(body.get("quantity"), "quantity"),
            details=body.get("details"),
            driver_name=body.get("driver_name"),
            vehicle_number=body.get("vehicle_number"),
        ),
        request,
    )


@csrf_exempt
def stock_event_delete_view(request: HttpRequest, event_id: str) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_stock_event_delete,
        lambda body: StockEventDeleteHttpRequest(event_id=event_id),
        request,
    )


@csrf_exempt
def customer_delete_view(request: HttpRequest, customer: str) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch_write(
        post_customer_delete,
        lambda body: CustomerDeleteHttpRequest(customer=customer),
        request,
    )
