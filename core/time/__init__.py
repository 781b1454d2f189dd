"""
Sheet Ledger Core Time — Public API
=====================================
Explicit clock protocol and date-window helpers.
Doctrine: NO date.today() in ledger logic.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    set_default_clock,
    today,
)
from core.time.windows import (
    DateRangeOption,
    DateWindow,
    filter_by_date,
    resolve_date_window,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "today",
    "DateRangeOption",
    "DateWindow",
    "filter_by_date",
    "resolve_date_window",
]
