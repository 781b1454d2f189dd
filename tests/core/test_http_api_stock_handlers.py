from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from core.config.rules import LedgerRules
from core.event_store.store import InMemoryStockEventStore
from core.http_api.contracts import (
    CustomerDeleteHttpRequest,
    DateRangeRequest,
    HistoryReadRequest,
    HttpApiResponse,
    ItemStockReadRequest,
    StockEventCreateHttpRequest,
    StockEventDeleteHttpRequest,
    StockEventUpdateHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
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
from core.time.clock import FixedClock
from core.time.windows import DateRangeOption

NOW = datetime(2023, 10, 20, 9, 0, tzinfo=timezone.utc)
STEEL = {"item_code": "S-10mm", "item_type": "Steel 10mm"}


class _SequentialIdProvider:
    def __init__(self):
        self._next = 0

    def new_event_id(self) -> str:
        self._next += 1
        return f"EVT-{self._next:03d}"


class _BrokenStore(InMemoryStockEventStore):
    def list_events(self):
        raise RuntimeError("log unavailable")


def _dependencies(rules: LedgerRules | None = None, store=None) -> HttpApiDependencies:
    return HttpApiDependencies(
        event_store=store if store is not None else InMemoryStockEventStore(),
        rules=rules or LedgerRules(),
        id_provider=_SequentialIdProvider(),
        clock=FixedClock(NOW),
    )


def _post(dependencies, **event_data):
    return post_stock_event(
        StockEventCreateHttpRequest(event_data=event_data),
        dependencies,
    )


def _seed(dependencies):
    _post(dependencies, action="RECEIVE", customer="ABC Corp", quantity=100,
          occurred_on="2023-10-10", event_id="TRX-001", **STEEL)
    _post(dependencies, action="PROCESS", customer="ABC Corp", quantity=20,
          occurred_on="2023-10-12", event_id="TRX-002", **STEEL)
    _post(dependencies, action="RECEIVE", customer="XYZ Ltd", quantity=50,
          occurred_on="2023-10-14", event_id="TRX-003",
          item_code="A-5mm", item_type="Acrylic 5mm")


# ══════════════════════════════════════════════════════════════
# CONTRACTS
# ══════════════════════════════════════════════════════════════

def test_history_request_rejects_unknown_order():
    with pytest.raises(ValueError, match="order must be one of"):
        HistoryReadRequest(customer="ABC Corp", order="RANDOM")


def test_custom_range_requires_both_dates():
    with pytest.raises(ValueError, match="CUSTOM"):
        DateRangeRequest(date_range=DateRangeOption.CUSTOM, start=date(2023, 1, 1))


def test_error_response_requires_error_body():
    with pytest.raises(ValueError, match="error must be set"):
        HttpApiResponse(ok=False).to_dict()


def test_update_request_rejects_bool_quantity():
    with pytest.raises(ValueError, match="quantity"):
        StockEventUpdateHttpRequest(event_id="x", quantity=True)


@pytest.mark.parametrize("field_name", ["details", "driver_name", "vehicle_number"])
def test_update_request_rejects_non_string_text(field_name):
    with pytest.raises(ValueError, match=field_name):
        StockEventUpdateHttpRequest(event_id="x", **{field_name: 123})


def test_success_envelope_is_ok_and_data():
    assert HttpApiResponse(ok=True, data={"n": 1}).to_dict() == {"ok": True, "data": {"n": 1}}


# ══════════════════════════════════════════════════════════════
# WRITES
# ══════════════════════════════════════════════════════════════

def test_post_assigns_id_and_today():
    deps = _dependencies()
    payload = _post(deps, action="RECEIVE", customer="ABC Corp", quantity=5, **STEEL)
    assert payload["ok"] is True
    event = payload["data"]["event"]
    assert event["event_id"] == "EVT-001"
    assert event["occurred_on"] == "2023-10-20"
    assert len(deps.event_store) == 1


def test_post_invalid_payload_is_invalid_request():
    deps = _dependencies()
    payload = _post(deps, action="RETURN", customer="ABC Corp", quantity=5, **STEEL)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "INVALID_REQUEST"
    assert "destination_pool" in payload["error"]["message"]


def test_post_zero_quantity_rejected_by_store():
    deps = _dependencies()
    payload = _post(deps, action="RECEIVE", customer="ABC Corp", quantity=0, **STEEL)
    assert payload["error"]["code"] == "INVALID_REQUEST"
    assert len(deps.event_store) == 0


def test_post_duplicate_event_id():
    deps = _dependencies()
    _seed(deps)
    payload = _post(deps, action="RECEIVE", customer="ABC Corp", quantity=1,
                    event_id="TRX-001", **STEEL)
    assert payload["error"]["code"] == "DUPLICATE_EVENT"
    assert payload["error"]["details"]["event_id"] == "TRX-001"


def test_post_over_draw_rejected_with_policy_name():
    deps = _dependencies()
    _seed(deps)
    payload = _post(deps, action="WASTAGE", customer="ABC Corp", quantity=81, **STEEL)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "INSUFFICIENT_STOCK"
    assert payload["error"]["details"]["policy_name"] == "pool_availability_policy"
    assert len(deps.event_store) == 3


def test_post_over_draw_allowed_when_not_enforced():
    deps = _dependencies(rules=LedgerRules(enforce_pool_availability=False))
    _seed(deps)
    payload = _post(deps, action="RETURN", customer="ABC Corp", quantity=500,
                    destination_pool="CUT", **STEEL)
    assert payload["ok"] is True


def test_update_event():
    deps = _dependencies()
    _seed(deps)
    payload = post_stock_event_update(
        StockEventUpdateHttpRequest(event_id="TRX-002", quantity=30, details="Batch 1 Final"),
        deps,
    )
    assert payload["ok"] is True
    assert payload["data"]["event"]["quantity"] == 30
    assert payload["data"]["event"]["metadata"]["details"] == "Batch 1 Final"


def test_post_non_string_metadata_is_invalid_request():
    deps = _dependencies()
    _seed(deps)
    payload = _post(deps, action="RETURN", customer="ABC Corp", quantity=5,
                    destination_pool="RAW", metadata={"details": 123}, **STEEL)
    assert payload["error"]["code"] == "INVALID_REQUEST"
    assert "metadata.details" in payload["error"]["message"]
    assert len(deps.event_store) == 3
    history = get_customer_history(HistoryReadRequest(customer="ABC Corp", search="gate"), deps)
    assert history["ok"] is True


def test_update_over_draw_rejected():
    deps = _dependencies()
    _seed(deps)
    _post(deps, action="WASTAGE", customer="ABC Corp", quantity=1,
          event_id="TRX-010", **STEEL)
    payload = post_stock_event_update(
        StockEventUpdateHttpRequest(event_id="TRX-010", quantity=81),
        deps,
    )
    assert payload["ok"] is False
    assert payload["error"]["code"] == "INSUFFICIENT_STOCK"
    assert payload["error"]["details"]["event_id"] == "TRX-010"
    assert deps.event_store.get_event("TRX-010").quantity == 1


def test_update_up_to_available_counts_own_old_quantity():
    deps = _dependencies()
    _seed(deps)
    _post(deps, action="WASTAGE", customer="ABC Corp", quantity=1,
          event_id="TRX-010", **STEEL)
    payload = post_stock_event_update(
        StockEventUpdateHttpRequest(event_id="TRX-010", quantity=80),
        deps,
    )
    assert payload["ok"] is True
    assert payload["data"]["event"]["quantity"] == 80


def test_update_over_draw_allowed_when_not_enforced():
    deps = _dependencies(rules=LedgerRules(enforce_pool_availability=False))
    _seed(deps)
    _post(deps, action="WASTAGE", customer="ABC Corp", quantity=1,
          event_id="TRX-010", **STEEL)
    payload = post_stock_event_update(
        StockEventUpdateHttpRequest(event_id="TRX-010", quantity=500),
        deps,
    )
    assert payload["ok"] is True


def test_update_missing_event():
    deps = _dependencies()
    payload = post_stock_event_update(
        StockEventUpdateHttpRequest(event_id="nope", quantity=3),
        deps,
    )
    assert payload["error"]["code"] == "EVENT_NOT_FOUND"


def test_delete_event_and_missing():
    deps = _dependencies()
    _seed(deps)
    payload = post_stock_event_delete(StockEventDeleteHttpRequest(event_id="TRX-003"), deps)
    assert payload["data"] == {"deleted_event_id": "TRX-003"}
    again = post_stock_event_delete(StockEventDeleteHttpRequest(event_id="TRX-003"), deps)
    assert again["error"]["code"] == "EVENT_NOT_FOUND"


def test_delete_customer():
    deps = _dependencies()
    _seed(deps)
    payload = post_customer_delete(CustomerDeleteHttpRequest(customer="ABC Corp"), deps)
    assert payload["data"] == {"customer": "ABC Corp", "deleted_events": 2}


# ══════════════════════════════════════════════════════════════
# READS
# ══════════════════════════════════════════════════════════════

def test_list_customer_summaries():
    deps = _dependencies()
    _seed(deps)
    payload = list_customer_summaries(deps)
    assert payload["ok"] is True
    assert payload["data"]["count"] == 2
    abc = payload["data"]["items"][0]
    assert abc["customer"] == "ABC Corp"
    assert abc["total_balance"] == 100


def test_item_stock_sheet_defaults_to_rules():
    deps = _dependencies(rules=LedgerRules(stock_sheet_active_only=False))
    _seed(deps)
    payload = get_item_stock_sheet(ItemStockReadRequest(customer="ABC Corp"), deps)
    assert payload["data"]["active_only"] is False
    assert payload["data"]["items"][0]["balance_raw"] == 80
    assert payload["data"]["items"][0]["balance_cut"] == 20


def test_customer_history_with_window_and_order():
    deps = _dependencies()
    _seed(deps)
    payload = get_customer_history(
        HistoryReadRequest(
            customer="ABC Corp",
            period=DateRangeRequest(
                date_range=DateRangeOption.CUSTOM,
                start=date(2023, 10, 11),
                end=date(2023, 10, 31),
            ),
            order="NEWEST_FIRST",
        ),
        deps,
    )
    data = payload["data"]
    assert data["order"] == "NEWEST_FIRST"
    assert data["window"] == {"start": "2023-10-11", "end": "2023-10-31"}
    assert [item["event_id"] for item in data["items"]] == ["TRX-002"]
    assert data["items"][0]["balance_after"] == 100


def test_customer_history_week_uses_clock():
    deps = _dependencies()
    _seed(deps)
    payload = get_customer_history(
        HistoryReadRequest(
            customer="ABC Corp",
            period=DateRangeRequest(date_range=DateRangeOption.WEEK),
        ),
        deps,
    )
    assert payload["data"]["window"]["start"] == "2023-10-13"
    assert payload["data"]["count"] == 0


def test_movement_stats():
    deps = _dependencies()
    _seed(deps)
    payload = get_movement_stats(DateRangeRequest(), deps)
    assert payload["data"]["sheets_in"] == 150
    assert payload["data"]["sheets_out"] == 0
    assert payload["data"]["window"] == {"start": None, "end": None}


def test_read_failure_maps_to_read_model_error():
    deps = _dependencies(store=_BrokenStore())
    payload = list_customer_summaries(deps)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "READ_MODEL_ERROR"
    assert payload["error"]["details"]["error_type"] == "RuntimeError"


def test_dates_without_range_mean_custom_window():
    deps = _dependencies()
    _seed(deps)
    payload = get_customer_history(
        HistoryReadRequest(
            customer="ABC Corp",
            period=DateRangeRequest(start=date(2023, 10, 11), end=date(2023, 10, 31)),
        ),
        deps,
    )
    assert payload["data"]["window"] == {"start": "2023-10-11", "end": "2023-10-31"}
    assert [item["event_id"] for item in payload["data"]["items"]] == ["TRX-002"]


def test_single_date_without_range_is_invalid_request():
    deps = _dependencies()
    _seed(deps)
    payload = get_movement_stats(DateRangeRequest(start=date(2023, 10, 11)), deps)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "INVALID_REQUEST"
