"""
Tests for core.config.rules — LedgerRules and the settings reader.
"""

import pytest

from core.config import LedgerRules, ledger_rules_from_mapping
from core.time.windows import DateRangeOption


class TestLedgerRules:
    def test_defaults(self):
        rules = LedgerRules()
        assert rules.enforce_pool_availability is True
        assert rules.stock_sheet_active_only is True
        assert rules.default_date_range == DateRangeOption.ALL
        assert rules.default_history_order == "ITEM_ASC"
        assert rules.seed_demo_data is False

    def test_rejects_custom_default_range(self):
        with pytest.raises(ValueError, match="CUSTOM"):
            LedgerRules(default_date_range=DateRangeOption.CUSTOM)

    def test_rejects_unknown_history_order(self):
        with pytest.raises(ValueError, match="default_history_order"):
            LedgerRules(default_history_order="RANDOM")

    def test_rejects_string_date_range(self):
        with pytest.raises(ValueError, match="DateRangeOption"):
            LedgerRules(default_date_range="ALL")


class TestLedgerRulesFromMapping:
    def test_empty_mapping_gives_defaults(self):
        assert ledger_rules_from_mapping(None) == LedgerRules()
        assert ledger_rules_from_mapping({}) == LedgerRules()

    def test_reads_env_style_strings(self):
        rules = ledger_rules_from_mapping({
            "ENFORCE_POOL_AVAILABILITY": "0",
            "SEED_DEMO_DATA": "true",
            "DEFAULT_DATE_RANGE": "month",
            "DEFAULT_HISTORY_ORDER": "newest_first",
        })
        assert rules.enforce_pool_availability is False
        assert rules.seed_demo_data is True
        assert rules.default_date_range == DateRangeOption.MONTH
        assert rules.default_history_order == "NEWEST_FIRST"

    def test_missing_keys_keep_defaults(self):
        rules = ledger_rules_from_mapping({"STOCK_SHEET_ACTIVE_ONLY": False})
        assert rules.stock_sheet_active_only is False
        assert rules.enforce_pool_availability is True

    def test_rejects_unknown_date_range(self):
        with pytest.raises(ValueError, match="DEFAULT_DATE_RANGE"):
            ledger_rules_from_mapping({"DEFAULT_DATE_RANGE": "DECADE"})

    def test_rejects_non_boolean(self):
        with pytest.raises(ValueError, match="ENFORCE_POOL_AVAILABILITY"):
            ledger_rules_from_mapping({"ENFORCE_POOL_AVAILABILITY": "maybe"})
