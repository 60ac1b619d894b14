"""
Flat-Rate Calculator

Percentage commission plus a fixed fee per sale, with no cap and no
brackets (Nuvemshop).
"""

from decimal import Decimal

from ..models import ChannelQuote, FeeSchedule


class FlatRateCalculator:
    """Forward and reverse pricing for a percent + fixed fee channel."""

    def forward(self, gross: Decimal, schedule: FeeSchedule) -> ChannelQuote:
        """
        Net payout for a gross list price.

        net = gross * (1 - percent/100) - fixed
        """
        commission = gross * schedule.rate
        net = max(Decimal("0"), gross - commission - schedule.fixed_fee)
        return ChannelQuote(
            channel=schedule.channel,
            price=net,
            gross=gross,
            net=net,
            commission=commission,
            fixed_fee=schedule.fixed_fee,
        )

    def reverse(self, net: Decimal, schedule: FeeSchedule) -> ChannelQuote:
        """
        Gross list price needed to receive `net`.

        gross = (net + fixed) / (1 - percent/100), the exact inverse of forward.
        """
        gross = (net + schedule.fixed_fee) / schedule.keep_ratio
        return ChannelQuote(
            channel=schedule.channel,
            price=gross,
            gross=gross,
            net=net,
            commission=gross * schedule.rate,
            fixed_fee=schedule.fixed_fee,
        )
