"""
Tests for core.time — Clock protocol and date-window helpers.
"""

import pytest
from datetime import date, datetime, timezone

from core.time.clock import (
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

TODAY = date(2024, 3, 31)


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        clock = SystemClock()
        dt = clock.now_utc()
        assert dt.tzinfo == timezone.utc

    def test_today_matches_now(self):
        clock = SystemClock()
        assert clock.today() <= clock.now_utc().date()


class TestFixedClock:
    def test_returns_fixed_day(self):
        clock = FixedClock(datetime(2023, 10, 15, 9, 30, tzinfo=timezone.utc))
        assert clock.today() == date(2023, 10, 15)
        assert clock.today() == date(2023, 10, 15)  # Same every time

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2023, 1, 1))

    def test_advance_days(self):
        clock = FixedClock(datetime(2023, 10, 15, tzinfo=timezone.utc))
        clock.advance_days(3)
        assert clock.today() == date(2023, 10, 18)


class TestDefaultClock:
    def test_set_and_get_default(self):
        original = get_default_clock()
        fixed = FixedClock(datetime(2023, 10, 15, tzinfo=timezone.utc))
        set_default_clock(fixed)
        try:
            assert get_default_clock() is fixed
            assert today() == date(2023, 10, 15)
        finally:
            set_default_clock(original)


# ── Date Window Tests ────────────────────────────────────────

class TestDateWindow:
    def test_rejects_inverted_bounds(self):
        with pytest.raises(ValueError, match="must be <="):
            DateWindow(start=date(2024, 2, 1), end=date(2024, 1, 1))

    def test_contains_is_inclusive(self):
        window = DateWindow(start=date(2024, 1, 1), end=date(2024, 1, 31))
        assert window.contains(date(2024, 1, 1))
        assert window.contains(date(2024, 1, 31))
        assert not window.contains(date(2024, 2, 1))

    def test_open_sides(self):
        window = DateWindow(start=date(2024, 1, 1))
        assert window.contains(date(2099, 1, 1))
        assert not window.is_unbounded
        assert DateWindow().is_unbounded

    def test_to_dict(self):
        window = DateWindow(start=date(2024, 1, 1))
        assert window.to_dict() == {"start": "2024-01-01", "end": None}


class TestResolveDateWindow:
    def test_all_is_unbounded(self):
        assert resolve_date_window(DateRangeOption.ALL, TODAY).is_unbounded

    def test_today_is_single_day(self):
        window = resolve_date_window(DateRangeOption.TODAY, TODAY)
        assert window == DateWindow(start=TODAY, end=TODAY)

    def test_week_starts_seven_days_back(self):
        window = resolve_date_window(DateRangeOption.WEEK, TODAY)
        assert window.start == date(2024, 3, 24)
        assert window.end is None

    def test_month_clamps_to_shorter_month(self):
        window = resolve_date_window(DateRangeOption.MONTH, TODAY)
        assert window.start == date(2024, 2, 29)

    def test_month_crosses_year(self):
        window = resolve_date_window(DateRangeOption.MONTH, date(2024, 1, 15))
        assert window.start == date(2023, 12, 15)

    def test_year_from_leap_day(self):
        window = resolve_date_window(DateRangeOption.YEAR, date(2024, 2, 29))
        assert window.start == date(2023, 2, 28)

    def test_custom_requires_both_ends(self):
        with pytest.raises(ValueError, match="start and end"):
            resolve_date_window(DateRangeOption.CUSTOM, TODAY, start=date(2024, 1, 1))

    def test_custom_window(self):
        window = resolve_date_window(
            DateRangeOption.CUSTOM, TODAY,
            start=date(2024, 1, 1), end=date(2024, 1, 31),
        )
        assert window == DateWindow(start=date(2024, 1, 1), end=date(2024, 1, 31))


class TestFilterByDate:
    def test_keeps_items_inside_window(self):
        days = [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]
        window = DateWindow(start=date(2024, 1, 15), end=date(2024, 2, 15))
        assert filter_by_date(days, window, lambda d: d) == [date(2024, 2, 1)]

    def test_none_window_keeps_everything(self):
        days = [date(2024, 1, 1), date(2024, 2, 1)]
        assert filter_by_date(days, None, lambda d: d) == days

    def test_drops_undated_items(self):
        items = [("a", date(2024, 1, 1)), ("b", None)]
        window = DateWindow(start=date(2023, 1, 1))
        assert filter_by_date(items, window, lambda i: i[1]) == [items[0]]
