"""
Sheet Ledger HTTP API - Public API
====================================
"""

from core.http_api.contracts import (
    CustomerDeleteHttpRequest,
    DateRangeRequest,
    HistoryReadRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    ItemStockReadRequest,
    StockEventCreateHttpRequest,
    StockEventDeleteHttpRequest,
    StockEventUpdateHttpRequest,
)
from core.http_api.dependencies import (
    HttpApiDependencies,
    IdProvider,
    UuidIdProvider,
)
from core.http_api.errors import (
    error_response,
    map_store_error,
    rejection_response,
    store_error_response,
    success_response,
)
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

__all__ = [
    "ItemStockReadRequest",
    "DateRangeRequest",
    "HistoryReadRequest",
    "StockEventCreateHttpRequest",
    "StockEventUpdateHttpRequest",
    "StockEventDeleteHttpRequest",
    "CustomerDeleteHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "IdProvider",
    "UuidIdProvider",
    "HttpApiDependencies",
    "error_response",
    "success_response",
    "rejection_response",
    "map_store_error",
    "store_error_response",
    "list_customer_summaries",
    "get_item_stock_sheet",
    "get_customer_history",
    "get_movement_stats",
    "post_stock_event",
    "post_stock_event_update",
    "post_stock_event_delete",
    "post_customer_delete",
]
