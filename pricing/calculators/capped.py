"""
Capped-Commission Calculator

Percentage commission plus a fixed fee, where the percentage part never
exceeds an absolute ceiling (Shopee).
"""

from decimal import Decimal

from ..models import ChannelQuote, FeeSchedule


class CappedCommissionCalculator:
    """Forward and reverse pricing for a channel with a commission cap."""

    def forward(self, gross: Decimal, schedule: FeeSchedule) -> ChannelQuote:
        """
        Net payout for a gross list price.

        commission = min(gross * percent/100, CAP)
        net = gross - commission - fixed
        """
        commission = gross * schedule.rate
        cap_applied = False
        if schedule.commission_cap is not None and commission > schedule.commission_cap:
            commission = schedule.commission_cap
            cap_applied = True

        net = max(Decimal("0"), gross - commission - schedule.fixed_fee)
        return ChannelQuote(
            channel=schedule.channel,
            price=net,
            gross=gross,
            net=net,
            commission=commission,
            fixed_fee=schedule.fixed_fee,
            cap_applied=cap_applied,
        )

    def reverse(self, net: Decimal, schedule: FeeSchedule) -> ChannelQuote:
        """
        Gross list price needed to receive `net`.

        Piecewise inverse of forward:
        1. Solve as if uncapped: candidate = (net + fixed) / (1 - percent/100)
        2. If the candidate's commission exceeds CAP, the cap is binding and
           the relationship is linear: gross = net + CAP + fixed
        3. Otherwise the candidate is the answer

        Both branches meet at candidate = CAP / (percent/100).
        """
        candidate = (net + schedule.fixed_fee) / schedule.keep_ratio
        implied_commission = candidate * schedule.rate

        if schedule.commission_cap is not None and implied_commission > schedule.commission_cap:
            gross = net + schedule.commission_cap + schedule.fixed_fee
            return ChannelQuote(
                channel=schedule.channel,
                price=gross,
                gross=gross,
                net=net,
                commission=schedule.commission_cap,
                fixed_fee=schedule.fixed_fee,
                cap_applied=True,
            )

        return ChannelQuote(
            channel=schedule.channel,
            price=candidate,
            gross=candidate,
            net=net,
            commission=implied_commission,
            fixed_fee=schedule.fixed_fee,
        )
