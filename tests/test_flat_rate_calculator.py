"""
Unit Tests for Flat-Rate Calculator

Tests verify the percent + fixed fee model in both directions.
"""

from decimal import Decimal

import pytest

from pricing.calculators.flat_rate import FlatRateCalculator
from pricing.models import Channel, FeeConfig, FeeSchedule

TOLERANCE = Decimal("1e-9")


class TestFlatRateReverse:
    """Test net -> gross (Nuvemshop: 4.99% + R$ 0.35)."""

    @pytest.fixture
    def calculator(self):
        return FlatRateCalculator()

    @pytest.fixture
    def schedule(self):
        return FeeConfig.default().flat_rate

    def test_default_rates(self, schedule):
        assert schedule.percent_rate == Decimal("4.99")
        assert schedule.fixed_fee == Decimal("0.35")

    def test_net_100(self, calculator, schedule):
        """(100 + 0.35) / 0.9501 = 105.62"""
        quote = calculator.reverse(Decimal("100"), schedule)
        assert quote.gross == Decimal("100.35") / Decimal("0.9501")
        assert round(quote.gross, 2) == Decimal("105.62")

    def test_price_is_gross(self, calculator, schedule):
        quote = calculator.reverse(Decimal("50"), schedule)
        assert quote.price == quote.gross
        assert quote.net == Decimal("50")
        assert quote.channel is Channel.FLAT_RATE

    def test_breakdown_adds_up(self, calculator, schedule):
        """gross - commission - fixed gives back the net."""
        quote = calculator.reverse(Decimal("80"), schedule)
        assert abs(quote.gross - quote.commission - quote.fixed_fee - Decimal("80")) < TOLERANCE

    def test_zero_percent_only_adds_fixed_fee(self, calculator):
        schedule = FeeSchedule(
            channel=Channel.FLAT_RATE, label="Test", percent_rate=Decimal("0"), fixed_fee=Decimal("2")
        )
        quote = calculator.reverse(Decimal("10"), schedule)
        assert quote.gross == Decimal("12")


class TestFlatRateForward:
    """Test gross -> net."""

    @pytest.fixture
    def calculator(self):
        return FlatRateCalculator()

    @pytest.fixture
    def schedule(self):
        return FeeConfig.default().flat_rate

    def test_gross_100(self, calculator, schedule):
        """100 × 0.9501 - 0.35 = 94.66"""
        quote = calculator.forward(Decimal("100"), schedule)
        assert quote.net == Decimal("94.66")
        assert quote.price == quote.net

    def test_tiny_gross_clamps_at_zero(self, calculator, schedule):
        """The fixed fee alone exceeds the price: payout is 0, never negative."""
        quote = calculator.forward(Decimal("0.10"), schedule)
        assert quote.net == Decimal("0")

    @pytest.mark.parametrize("net", ["0.01", "1", "19.90", "100", "1234.56", "99999"])
    def test_round_trip(self, calculator, schedule, net):
        net = Decimal(net)
        gross = calculator.reverse(net, schedule).gross
        assert abs(calculator.forward(gross, schedule).net - net) < TOLERANCE
