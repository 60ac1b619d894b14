"""
Unit Tests for Capped-Commission Calculator

Tests verify the commission cap in both directions, including the regime
switch in the reverse calculation.
"""

from decimal import Decimal

import pytest

from pricing.calculators.capped import CappedCommissionCalculator
from pricing.models import SHOPEE_COMMISSION_CAP, FeeConfig, FeeSchedule

TOLERANCE = Decimal("1e-9")


class TestCappedReverse:
    """Test net -> gross (Shopee: 20% + R$ 4.00, commission capped at R$ 105)."""

    @pytest.fixture
    def calculator(self):
        return CappedCommissionCalculator()

    @pytest.fixture
    def schedule(self):
        return FeeConfig.default().capped

    def test_cap_constant(self, schedule):
        assert schedule.commission_cap == Decimal("105.00")
        assert SHOPEE_COMMISSION_CAP == Decimal("105.00")

    def test_uncapped_regime(self, calculator, schedule):
        """(10 + 4) / 0.80 = 17.50, commission 3.50 is under the cap."""
        quote = calculator.reverse(Decimal("10"), schedule)
        assert quote.gross == Decimal("17.5")
        assert quote.commission == Decimal("3.5")
        assert quote.cap_applied is False

    def test_cap_binding(self, calculator, schedule):
        """
        net 600: uncapped candidate 755 would pay 151 commission > 105,
        so gross = 600 + 105 + 4 = 709 exactly.
        """
        quote = calculator.reverse(Decimal("600"), schedule)
        assert quote.gross == Decimal("709")
        assert quote.commission == Decimal("105")
        assert quote.cap_applied is True

    def test_cap_binding_forward_recovers_cap(self, calculator, schedule):
        gross = calculator.reverse(Decimal("600"), schedule).gross
        forward = calculator.forward(gross, schedule)
        assert forward.commission == SHOPEE_COMMISSION_CAP
        assert forward.net == Decimal("600")
        assert forward.cap_applied is True

    def test_exactly_at_cap_stays_uncapped(self, calculator, schedule):
        """net 416 gives candidate 525, whose commission equals the cap."""
        quote = calculator.reverse(Decimal("416"), schedule)
        assert quote.gross == Decimal("525")
        assert quote.commission == Decimal("105")
        assert quote.cap_applied is False

    def test_just_past_cap_is_continuous(self, calculator, schedule):
        quote = calculator.reverse(Decimal("416.01"), schedule)
        assert quote.cap_applied is True
        assert quote.gross == Decimal("525.01")

    def test_no_cap_configured(self, calculator, schedule):
        uncapped = FeeSchedule(
            channel=schedule.channel,
            label=schedule.label,
            percent_rate=schedule.percent_rate,
            fixed_fee=schedule.fixed_fee,
        )
        quote = calculator.reverse(Decimal("600"), uncapped)
        assert quote.gross == Decimal("755")
        assert quote.cap_applied is False


class TestCappedForward:
    """Test gross -> net."""

    @pytest.fixture
    def calculator(self):
        return CappedCommissionCalculator()

    @pytest.fixture
    def schedule(self):
        return FeeConfig.default().capped

    def test_under_cap(self, calculator, schedule):
        """100 - 20 - 4 = 76"""
        quote = calculator.forward(Decimal("100"), schedule)
        assert quote.net == Decimal("76")
        assert quote.cap_applied is False

    def test_over_cap(self, calculator, schedule):
        """1000 - 105 - 4 = 891"""
        quote = calculator.forward(Decimal("1000"), schedule)
        assert quote.commission == Decimal("105.00")
        assert quote.net == Decimal("891")
        assert quote.cap_applied is True

    def test_tiny_gross_clamps_at_zero(self, calculator, schedule):
        assert calculator.forward(Decimal("2"), schedule).net == Decimal("0")

    @pytest.mark.parametrize("net", ["0.01", "5", "49.90", "250", "415.99"])
    def test_round_trip_uncapped(self, calculator, schedule, net):
        net = Decimal(net)
        gross = calculator.reverse(net, schedule).gross
        assert abs(calculator.forward(gross, schedule).net - net) < TOLERANCE

    @pytest.mark.parametrize("net", ["416.01", "600", "5000"])
    def test_round_trip_capped(self, calculator, schedule, net):
        net = Decimal(net)
        gross = calculator.reverse(net, schedule).gross
        assert calculator.forward(gross, schedule).net == net
