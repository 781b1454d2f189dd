"""
Sheet Ledger Core Config — Public API
=======================================
Configurable ledger behaviour, read from Django settings.
"""

from core.config.rules import (
    LedgerRules,
    VALID_HISTORY_ORDERS,
    ledger_rules_from_mapping,
)

__all__ = [
    "LedgerRules",
    "VALID_HISTORY_ORDERS",
    "ledger_rules_from_mapping",
]
