"""
Sheet Ledger Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    DEMO_CUSTOMER_ABC,
    DEMO_CUSTOMER_XYZ,
    build_dependencies,
    demo_stock_events,
    install_dependencies,
    reset_dependencies,
)

__all__ = [
    "DEMO_CUSTOMER_ABC",
    "DEMO_CUSTOMER_XYZ",
    "build_dependencies",
    "demo_stock_events",
    "install_dependencies",
    "reset_dependencies",
]
