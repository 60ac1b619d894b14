"""
Input Validation for the Marketplace Pricing Engine

Two kinds of input are checked here:
- Amounts: an invalid amount is not an error, it means "nothing to compute",
  so parse_amount returns None instead of raising.
- Fee configuration: a broken schedule is a caller bug and raises ValueError
  with a clear message.
"""

import logging
from decimal import Decimal, InvalidOperation, getcontext

from .models import Direction, FeeConfig, FeeSchedule

logger = logging.getLogger(__name__)

AMOUNT_EXPONENT_HEADROOM = 32


class InputValidator:
    """Validates amounts, directions and fee schedules."""

    def parse_amount(self, value) -> Decimal | None:
        """
        Convert a raw amount into a positive finite Decimal.

        Accepts Decimal, int, float and numeric strings (a decimal comma is
        allowed: "12,50"). Returns None for missing, zero, negative, NaN,
        infinite, non-numeric or unpriceably large input.
        """
        if value is None or isinstance(value, bool):
            logger.debug(f"Ignoring non-numeric amount: {value!r}")
            return None

        if isinstance(value, str):
            value = value.strip().replace(",", ".")
            if not value:
                return None

        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            logger.debug(f"Ignoring non-numeric amount: {value!r}")
            return None

        if not amount.is_finite() or amount <= 0:
            logger.debug(f"Ignoring non-positive or non-finite amount: {value!r}")
            return None

        # fee arithmetic divides by keep_ratio, which can be as small as 1e-28
        if amount.adjusted() > getcontext().Emax - AMOUNT_EXPONENT_HEADROOM:
            logger.debug(f"Ignoring amount too large to price: {value!r}")
            return None

        return amount

    def parse_direction(self, value) -> Direction:
        """Resolve a direction flag. Raises ValueError for unknown values."""
        if isinstance(value, Direction):
            return value
        try:
            return Direction(value)
        except ValueError:
            raise ValueError(
                f"Invalid direction: {value!r}. Must be 'forward' or 'reverse'"
            ) from None

    def validate_config(self, config: FeeConfig) -> None:
        """Run all schedule checks. Raises ValueError if any check fails."""
        self._validate_schedule(config.flat_rate)
        self._validate_schedule(config.capped)
        self._validate_schedule(config.bracketed)

    def _validate_schedule(self, schedule: FeeSchedule) -> None:
        name = schedule.label

        if not schedule.percent_rate.is_finite() or not (0 <= schedule.percent_rate < 100):
            raise ValueError(
                f"{name}: percent_rate must be in [0, 100), got: {schedule.percent_rate}"
            )

        if not schedule.fixed_fee.is_finite() or schedule.fixed_fee < 0:
            raise ValueError(f"{name}: fixed_fee cannot be negative, got: {schedule.fixed_fee}")

        if schedule.fixed_fee.adjusted() > getcontext().Emax - AMOUNT_EXPONENT_HEADROOM:
            raise ValueError(f"{name}: fixed_fee is too large, got: {schedule.fixed_fee}")

        if schedule.commission_cap is not None and schedule.commission_cap < 0:
            raise ValueError(
                f"{name}: commission_cap cannot be negative, got: {schedule.commission_cap}"
            )

        self._validate_brackets(schedule)

    def _validate_brackets(self, schedule: FeeSchedule) -> None:
        brackets = schedule.service_fee_brackets
        if not brackets:
            return

        if schedule.fallback_service_fee is None:
            raise ValueError(
                f"{schedule.label}: fallback_service_fee is required when brackets are set"
            )

        previous = None
        for i, bracket in enumerate(brackets):
            if bracket.fee < 0:
                raise ValueError(f"{schedule.label}: bracket {i} fee cannot be negative")
            if previous is not None and bracket.upper_bound <= previous:
                raise ValueError(
                    f"{schedule.label}: bracket bounds must be strictly ascending, "
                    f"got {bracket.upper_bound} after {previous}"
                )
            previous = bracket.upper_bound

        if schedule.fallback_service_fee < 0:
            raise ValueError(f"{schedule.label}: fallback_service_fee cannot be negative")
