"""
Sheet Ledger Core Config — Ledger Rules
=========================================
Doctrine: No behaviour switches hardcoded in handlers.
Whether movements are checked against pool balances, and what the
dashboard shows by default, come from configuration (the
SHEETLEDGER dict in Django settings), not from source code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.time.windows import DateRangeOption

VALID_HISTORY_ORDERS = frozenset({"CHRONOLOGICAL", "NEWEST_FIRST", "ITEM_ASC"})

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


# ══════════════════════════════════════════════════════════════
# LEDGER RULES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LedgerRules:
    """
    Behaviour switches for the ledger HTTP surface.

    enforce_pool_availability: refuse PROCESS / RETURN / WASTAGE that
        draw more than the pool holds.
    stock_sheet_active_only:   default for the item sheet filter.
    default_date_range:        timeframe used when a request names none.
    default_history_order:     CHRONOLOGICAL | NEWEST_FIRST | ITEM_ASC.
    seed_demo_data:            load the demo log when the adapter boots.
    """

    enforce_pool_availability: bool = True
    stock_sheet_active_only: bool = True
    default_date_range: DateRangeOption = DateRangeOption.ALL
    default_history_order: str = "ITEM_ASC"
    seed_demo_data: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.default_date_range, DateRangeOption):
            raise ValueError("default_date_range must be DateRangeOption enum.")
        if self.default_date_range == DateRangeOption.CUSTOM:
            raise ValueError("default_date_range cannot be CUSTOM.")
        if self.default_history_order not in VALID_HISTORY_ORDERS:
            raise ValueError(
                f"default_history_order must be one of "
                f"{sorted(VALID_HISTORY_ORDERS)}, got {self.default_history_order!r}."
            )


def _coerce_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"{field_name} must be a boolean, got {value!r}.")


def ledger_rules_from_mapping(data: Optional[Mapping[str, Any]]) -> LedgerRules:
    """
    Build LedgerRules from a settings mapping.

    Keys are upper-case (Django convention); missing keys keep
    their defaults. Strings are accepted for booleans so that
    values can come straight from environment variables.
    """
    if not data:
        return LedgerRules()

    defaults = LedgerRules()
    date_range = data.get("DEFAULT_DATE_RANGE", defaults.default_date_range)
    if not isinstance(date_range, DateRangeOption):
        try:
            date_range = DateRangeOption(str(date_range).upper())
        except ValueError as exc:
            raise ValueError(f"Unknown DEFAULT_DATE_RANGE {date_range!r}.") from exc

    return LedgerRules(
        enforce_pool_availability=_coerce_bool(
            data.get("ENFORCE_POOL_AVAILABILITY", defaults.enforce_pool_availability),
            "ENFORCE_POOL_AVAILABILITY",
        ),
        stock_sheet_active_only=_coerce_bool(
            data.get("STOCK_SHEET_ACTIVE_ONLY", defaults.stock_sheet_active_only),
            "STOCK_SHEET_ACTIVE_ONLY",
        ),
        default_date_range=date_range,
        default_history_order=str(
            data.get("DEFAULT_HISTORY_ORDER", defaults.default_history_order)
        ).upper(),
        seed_demo_data=_coerce_bool(
            data.get("SEED_DEMO_DATA", defaults.seed_demo_data),
            "SEED_DEMO_DATA",
        ),
    )
