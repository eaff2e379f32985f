import pytest
from src.core.config import StockPolicy, parse_stock_policy

class TestStockPolicySetting:
    def test_known_values(self):
        assert parse_stock_policy("reject") is StockPolicy.REJECT
        assert parse_stock_policy("clamp") is StockPolicy.CLAMP
        assert parse_stock_policy("backorder") is StockPolicy.BACKORDER

    def test_case_and_whitespace_are_ignored(self):
        assert parse_stock_policy("Reject") is StockPolicy.REJECT
        assert parse_stock_policy("  BACKORDER ") is StockPolicy.BACKORDER

    def test_enum_passes_through(self):
        assert parse_stock_policy(StockPolicy.CLAMP) is StockPolicy.CLAMP

    def test_unknown_value_fails_with_choices(self):
        with pytest.raises(ValueError, match="Invalid STOCK_POLICY 'rejct'; expected one of: reject, clamp, backorder"):
            parse_stock_policy("rejct")
