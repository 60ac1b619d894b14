"""
Bracketed Service-Fee Calculator

Percentage commission plus a fixed fee plus a flat service fee whose value
depends on the bracket the gross price falls into (Elo7).
"""

import logging
from decimal import Decimal

from ..models import ChannelQuote, FeeSchedule, ServiceFeeBracket

logger = logging.getLogger(__name__)


def lookup_service_fee(
    gross: Decimal,
    brackets: tuple[ServiceFeeBracket, ...],
    fallback_fee: Decimal,
) -> Decimal:
    """Return the fee of the first bracket whose upper bound is >= gross."""
    for bracket in brackets:
        if gross <= bracket.upper_bound:
            return bracket.fee
    return fallback_fee


class BracketedServiceFeeCalculator:
    """Forward and reverse pricing for a channel with price-bracketed service fees."""

    def service_fee_for(self, gross: Decimal, schedule: FeeSchedule) -> Decimal:
        return lookup_service_fee(
            gross,
            schedule.service_fee_brackets,
            schedule.fallback_service_fee or Decimal("0"),
        )

    def forward(self, gross: Decimal, schedule: FeeSchedule) -> ChannelQuote:
        """
        Net payout for a gross list price.

        The bracket is read straight from the known gross price:
        net = gross * (1 - percent/100) - fixed - service_fee(gross)
        """
        service_fee = self.service_fee_for(gross, schedule)
        commission = gross * schedule.rate
        net = max(Decimal("0"), gross - commission - schedule.fixed_fee - service_fee)
        return ChannelQuote(
            channel=schedule.channel,
            price=net,
            gross=gross,
            net=net,
            commission=commission,
            fixed_fee=schedule.fixed_fee,
            service_fee=service_fee,
        )

    def reverse(self, net: Decimal, schedule: FeeSchedule) -> ChannelQuote:
        """
        Gross list price needed to receive `net`.

        The service fee depends on the gross price being solved for, so we
        look for a fixed point: try each bracket fee in bracket order
        (fallback fee last) and accept the first one whose resulting gross
        price falls back into a bracket charging that same fee.

        With strictly ascending bounds and non-decreasing fees a consistent
        fee always exists. For other tables the search can come up empty;
        then the gross is estimated with the lowest fee, re-bracketed once,
        and the quote is flagged `consistent=False`.
        """
        candidates = [bracket.fee for bracket in schedule.service_fee_brackets]
        candidates.append(schedule.fallback_service_fee or Decimal("0"))

        for fee in candidates:
            gross = self._gross_for(net, fee, schedule)
            if self.service_fee_for(gross, schedule) == fee:
                return self._quote(net, gross, fee, schedule, consistent=True)

        estimate = self._gross_for(net, min(candidates), schedule)
        fee = self.service_fee_for(estimate, schedule)
        gross = self._gross_for(net, fee, schedule)
        consistent = self.service_fee_for(gross, schedule) == fee

        logger.warning(
            f"{schedule.label}: no self-consistent service fee for net {net}; "
            f"fell back to fee {fee} (gross {gross}, consistent={consistent})"
        )
        return self._quote(net, gross, fee, schedule, consistent=consistent)

    def _gross_for(self, net: Decimal, fee: Decimal, schedule: FeeSchedule) -> Decimal:
        return (net + schedule.fixed_fee + fee) / schedule.keep_ratio

    def _quote(
        self,
        net: Decimal,
        gross: Decimal,
        fee: Decimal,
        schedule: FeeSchedule,
        consistent: bool,
    ) -> ChannelQuote:
        return ChannelQuote(
            channel=schedule.channel,
            price=gross,
            gross=gross,
            net=net,
            commission=gross * schedule.rate,
            fixed_fee=schedule.fixed_fee,
            service_fee=fee,
            consistent=consistent,
        )
