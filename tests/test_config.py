"""Tests for environment-driven fee configuration."""

from decimal import Decimal

import pytest

from pricing.config import env_overrides, load_fee_config
from pricing.models import FeeConfig


class TestEnvOverrides:

    def test_no_variables(self):
        assert env_overrides({}) == {}
        assert load_fee_config({}) == FeeConfig.default()

    def test_collects_per_channel_values(self):
        environ = {
            "PRICING_CAPPED_PERCENT_RATE": "14",
            "PRICING_FLAT_RATE_FIXED_FEE": " 0,39 ",
            "PRICING_BRACKETED_PERCENT_RATE": "",
            "UNRELATED": "1",
        }
        assert env_overrides(environ) == {
            "capped": {"percent_rate": "14"},
            "flat_rate": {"fixed_fee": "0,39"},
        }

    def test_load_applies_overrides(self):
        config = load_fee_config({"PRICING_CAPPED_PERCENT_RATE": "14", "PRICING_CAPPED_FIXED_FEE": "2"})
        assert config.capped.percent_rate == Decimal("14")
        assert config.capped.fixed_fee == Decimal("2")
        assert config.capped.commission_cap == Decimal("105.00")

    def test_load_rejects_invalid_values(self):
        with pytest.raises(ValueError):
            load_fee_config({"PRICING_FLAT_RATE_PERCENT_RATE": "150"})
        with pytest.raises(ValueError):
            load_fee_config({"PRICING_FLAT_RATE_PERCENT_RATE": "lots"})
