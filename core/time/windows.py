"""
Sheet Ledger Core Time — Date Windows
=======================================
Pure date-range helpers for the timeframe filters on dashboards
and history views.

All functions take the reference day explicitly — no hidden clock.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")


class DateRangeOption(Enum):
    TODAY = "TODAY"
    WEEK = "WEEK"       # last 7 days up to and including today
    MONTH = "MONTH"     # since the same day last month
    YEAR = "YEAR"       # since the same day last year
    ALL = "ALL"
    CUSTOM = "CUSTOM"   # explicit [start, end]


# ══════════════════════════════════════════════════════════════
# DATE WINDOW — Closed interval, either side may be open
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DateWindow:
    """
    A closed day interval [start, end].

    None on either side means unbounded on that side.
    Invariant: start <= end when both are set.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError(
                f"DateWindow start ({self.start}) must be <= end ({self.end})."
            )

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


# ══════════════════════════════════════════════════════════════
# PURE DATE FUNCTIONS
# ══════════════════════════════════════════════════════════════

def _shift_months(day: date, months: int) -> date:
    """Same day-of-month `months` away, clamped to the month's last day."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def resolve_date_window(
    option: DateRangeOption,
    today: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> DateWindow:
    """
    Turn a timeframe option into a concrete window.

    WEEK / MONTH / YEAR have no upper bound, so entries dated in
    the future still show up on the dashboard.
    CUSTOM requires both start and end.
    """
    if option == DateRangeOption.ALL:
        return DateWindow()
    if option == DateRangeOption.TODAY:
        return DateWindow(start=today, end=today)
    if option == DateRangeOption.WEEK:
        return DateWindow(start=today - timedelta(days=7))
    if option == DateRangeOption.MONTH:
        return DateWindow(start=_shift_months(today, -1))
    if option == DateRangeOption.YEAR:
        return DateWindow(start=_shift_months(today, -12))
    if start is None or end is None:
        raise ValueError("CUSTOM date range requires both start and end.")
    return DateWindow(start=start, end=end)


def filter_by_date(
    items: Iterable[T],
    window: Optional[DateWindow],
    day_of: Callable[[T], Optional[date]],
) -> List[T]:
    """Keep items whose day falls inside the window. Undated items are dropped."""
    if window is None or window.is_unbounded:
        return list(items)
    result = []
    for item in items:
        day = day_of(item)
        if day is not None and window.contains(day):
            result.append(item)
    return result
