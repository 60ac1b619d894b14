"""
Fee Engine - Main Orchestrator

Dispatches a single amount to the calculator of every channel and collects
the results. Pure computation: no I/O, no shared mutable state.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from .calculators import (
    BracketedServiceFeeCalculator,
    CappedCommissionCalculator,
    FlatRateCalculator,
    lookup_service_fee,
)
from .models import (
    CalculationInput,
    CalculationResult,
    Channel,
    Direction,
    FeeConfig,
    ServiceFeeBracket,
)
from .output import OutputBuilder
from .validators import InputValidator

logger = logging.getLogger(__name__)


class FeeEngine:
    """
    Computes channel prices in both directions.

    Pipeline:
    1. Resolve direction (ValueError if unknown)
    2. Merge overrides into the configuration and validate it
    3. Parse the amount (invalid -> no result)
    4. Run every channel calculator
    5. Build output (API helpers only)
    """

    def __init__(self, config: Optional[FeeConfig] = None):
        self.config = config or FeeConfig.default()
        self.validator = InputValidator()
        self.validator.validate_config(self.config)
        self.calculators = {
            Channel.FLAT_RATE: FlatRateCalculator(),
            Channel.CAPPED: CappedCommissionCalculator(),
            Channel.BRACKETED: BracketedServiceFeeCalculator(),
        }
        self.output_builder = OutputBuilder()

    def compute(self, input_data: CalculationInput, config: Optional[FeeConfig] = None) -> CalculationResult:
        """
        Price an already-validated input on every channel.

        Args:
            input_data: Positive amount plus direction
            config: Fee configuration; the engine's own when omitted

        Returns:
            CalculationResult with one quote per channel
        """
        config = config or self.config
        quotes = {}
        for channel, calculator in self.calculators.items():
            schedule = config.schedule_for(channel)
            if input_data.direction is Direction.REVERSE:
                quotes[channel.value] = calculator.reverse(input_data.amount, schedule)
            else:
                quotes[channel.value] = calculator.forward(input_data.amount, schedule)

        return CalculationResult(
            amount=input_data.amount,
            direction=input_data.direction,
            **quotes,
        )

    def compute_for_all_channels(
        self,
        amount,
        direction=Direction.REVERSE,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Optional[CalculationResult]:
        """
        Price a raw amount on every channel.

        Returns None when the amount is missing, non-positive or not a
        number. Unknown directions and broken overrides raise ValueError.
        """
        direction = self.validator.parse_direction(direction)
        config = self.resolve_config(overrides)

        value = self.validator.parse_amount(amount)
        if value is None:
            return None

        return self.compute(CalculationInput(amount=value, direction=direction), config)

    def lookup_bracketed_service_fee(
        self,
        gross_price,
        brackets: Optional[tuple[ServiceFeeBracket, ...]] = None,
        fallback_fee: Optional[Decimal] = None,
    ) -> Optional[Decimal]:
        """
        Service fee the bracketed channel charges at `gross_price`.

        Uses the configured bracket table unless one is given. Returns None
        for an invalid price.
        """
        gross = self.validator.parse_amount(gross_price)
        if gross is None:
            return None

        schedule = self.config.bracketed
        if brackets is None:
            brackets = schedule.service_fee_brackets
        if fallback_fee is None:
            fallback_fee = schedule.fallback_service_fee or Decimal("0")
        return lookup_service_fee(gross, brackets, fallback_fee)

    def resolve_config(self, overrides: Optional[Dict[str, Any]] = None) -> FeeConfig:
        """Engine configuration with a partial override applied and validated."""
        if not overrides:
            return self.config
        config = self.config.with_overrides(overrides)
        self.validator.validate_config(config)
        return config

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a calculation from raw dictionary input.

        Convenience method for API usage. Expects `amount`, optional
        `direction` (default "reverse") and optional `overrides`.
        """
        direction = self.validator.parse_direction(data.get("direction", Direction.REVERSE.value))
        config = self.resolve_config(data.get("overrides"))

        amount = self.validator.parse_amount(data.get("amount"))
        if amount is None:
            logger.info(f"No result for amount: {data.get('amount')!r}")
            return self.output_builder.build_no_result(direction)

        result = self.compute(CalculationInput(amount=amount, direction=direction), config)
        return self.output_builder.build(result, config)

    def service_fee_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Bracket lookup from raw dictionary input (`gross_price`)."""
        gross = self.validator.parse_amount(data.get("gross_price"))
        fee = self.lookup_bracketed_service_fee(gross) if gross is not None else None
        return self.output_builder.build_service_fee(gross, fee)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def compute_for_all_channels(amount, direction="reverse", overrides=None) -> Optional[Dict[str, Decimal]]:
    """
    Price an amount on every channel with the default configuration.

    Returns {"flat_rate": ..., "capped": ..., "bracketed": ...} or None.
    """
    result = FeeEngine().compute_for_all_channels(amount, direction, overrides)
    if result is None:
        return None
    return result.prices()


def lookup_bracketed_service_fee(gross_price) -> Optional[Decimal]:
    """Default bracket table lookup."""
    return FeeEngine().lookup_bracketed_service_fee(gross_price)
