"""
Domain Models for the Marketplace Pricing Engine

These dataclasses provide type-safe representations of channel fee schedules
and calculation results. All monetary values use Decimal for precision.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from enum import Enum

# =============================================================================
# ENUMERATIONS
# =============================================================================


class Channel(Enum):
    """The three sales channels, one per fee model."""

    FLAT_RATE = "flat_rate"
    CAPPED = "capped"
    BRACKETED = "bracketed"


class Direction(Enum):
    """Which way a calculation runs."""

    FORWARD = "forward"  # gross list price -> net payout
    REVERSE = "reverse"  # desired net payout -> gross list price


# =============================================================================
# CONFIGURATION MODELS
# =============================================================================


@dataclass(frozen=True)
class ServiceFeeBracket:
    """A flat service fee charged when the gross price is <= upper_bound."""

    upper_bound: Decimal
    fee: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> "ServiceFeeBracket":
        return cls(
            upper_bound=Decimal(str(data["upper_bound"])),
            fee=Decimal(str(data["fee"])),
        )


@dataclass(frozen=True)
class FeeSchedule:
    """Fee configuration for a single channel."""

    channel: Channel
    label: str
    percent_rate: Decimal  # percentage number: 4.99 means 4.99%
    fixed_fee: Decimal
    commission_cap: Decimal | None = None  # None = uncapped
    service_fee_brackets: tuple[ServiceFeeBracket, ...] = ()
    fallback_service_fee: Decimal | None = None  # fee above every bracket bound

    @property
    def rate(self) -> Decimal:
        """Commission rate as a fraction (20 -> 0.20)."""
        return self.percent_rate / Decimal("100")

    @property
    def keep_ratio(self) -> Decimal:
        """Share of the gross price left after the percentage commission."""
        return Decimal("1") - self.rate

    def with_rates(self, percent_rate=None, fixed_fee=None) -> "FeeSchedule":
        """Return a copy with percent_rate and/or fixed_fee replaced."""
        changes = {}
        if percent_rate is not None:
            changes["percent_rate"] = _to_decimal(percent_rate, "percent_rate")
        if fixed_fee is not None:
            changes["fixed_fee"] = _to_decimal(fixed_fee, "fixed_fee")
        return replace(self, **changes)


def _to_decimal(value, name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got: {value!r}")
    try:
        return Decimal(str(value).replace(",", "."))
    except InvalidOperation:
        raise ValueError(f"{name} must be a number, got: {value!r}") from None


# =============================================================================
# DEFAULT CHANNEL CONFIGURATION
# =============================================================================

SHOPEE_COMMISSION_CAP = Decimal("105.00")

ELO7_SERVICE_FEE_BRACKETS = (
    ServiceFeeBracket(upper_bound=Decimal("29.89"), fee=Decimal("1.99")),
    ServiceFeeBracket(upper_bound=Decimal("79.89"), fee=Decimal("2.49")),
    ServiceFeeBracket(upper_bound=Decimal("149.89"), fee=Decimal("2.99")),
    ServiceFeeBracket(upper_bound=Decimal("299.89"), fee=Decimal("4.99")),
)
ELO7_FALLBACK_SERVICE_FEE = Decimal("5.99")

DEFAULT_SCHEDULES = {
    Channel.FLAT_RATE: FeeSchedule(
        channel=Channel.FLAT_RATE,
        label="Nuvemshop",
        percent_rate=Decimal("4.99"),
        fixed_fee=Decimal("0.35"),
    ),
    Channel.CAPPED: FeeSchedule(
        channel=Channel.CAPPED,
        label="Shopee",
        percent_rate=Decimal("20"),
        fixed_fee=Decimal("4.00"),
        commission_cap=SHOPEE_COMMISSION_CAP,
    ),
    Channel.BRACKETED: FeeSchedule(
        channel=Channel.BRACKETED,
        label="Elo7",
        percent_rate=Decimal("20"),
        # the old flat 3.99 stood in for the service fee, now charged per bracket
        fixed_fee=Decimal("0.00"),
        service_fee_brackets=ELO7_SERVICE_FEE_BRACKETS,
        fallback_service_fee=ELO7_FALLBACK_SERVICE_FEE,
    ),
}


@dataclass(frozen=True)
class FeeConfig:
    """One fee schedule per channel, passed explicitly into every calculation."""

    flat_rate: FeeSchedule
    capped: FeeSchedule
    bracketed: FeeSchedule

    def schedule_for(self, channel: Channel) -> FeeSchedule:
        return getattr(self, channel.value)

    @classmethod
    def default(cls) -> "FeeConfig":
        return cls(
            flat_rate=DEFAULT_SCHEDULES[Channel.FLAT_RATE],
            capped=DEFAULT_SCHEDULES[Channel.CAPPED],
            bracketed=DEFAULT_SCHEDULES[Channel.BRACKETED],
        )

    def with_overrides(self, overrides: dict | None) -> "FeeConfig":
        """
        Apply a partial configuration.

        `overrides` maps a channel identifier ("flat_rate", "capped",
        "bracketed") to a dict holding any of `percent_rate` and `fixed_fee`.
        Unknown channels raise ValueError.
        """
        if overrides is None:
            return self
        if not isinstance(overrides, dict):
            raise ValueError(f"overrides must be an object, got: {overrides!r}")
        if not overrides:
            return self

        changes = {}
        for key, values in overrides.items():
            try:
                channel = Channel(key)
            except ValueError:
                raise ValueError(
                    f"Unknown channel in overrides: {key!r}. "
                    f"Must be one of {[c.value for c in Channel]}"
                ) from None
            values = values or {}
            if not isinstance(values, dict):
                raise ValueError(f"Overrides for {key!r} must be an object, got: {values!r}")
            changes[channel.value] = self.schedule_for(channel).with_rates(
                percent_rate=values.get("percent_rate"),
                fixed_fee=values.get("fixed_fee"),
            )
        return replace(self, **changes)


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass
class CalculationInput:
    """A single monetary amount plus the direction to solve in."""

    amount: Decimal
    direction: Direction


@dataclass
class Product:
    """A catalog product as handed over by the catalog exporter."""

    product_id: str
    name: str
    base_price: object  # raw value; validated when the sheet is built

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            product_id=str(data.get("id", "")),
            name=data.get("name", ""),
            base_price=data.get("base_price"),
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass
class ChannelQuote:
    """
    The computed price for one channel and how it was reached.

    `price` is the gross list price for a reverse calculation and the net
    payout for a forward one. `gross` / `net` always hold both sides.
    """

    channel: Channel
    price: Decimal
    gross: Decimal
    net: Decimal
    commission: Decimal = Decimal("0")
    fixed_fee: Decimal = Decimal("0")
    service_fee: Decimal = Decimal("0")
    cap_applied: bool = False
    consistent: bool = True  # bracket used matches the bracket of `gross`


@dataclass
class CalculationResult:
    """One quote per channel for a single input amount."""

    amount: Decimal
    direction: Direction
    flat_rate: ChannelQuote
    capped: ChannelQuote
    bracketed: ChannelQuote

    def quote_for(self, channel: Channel) -> ChannelQuote:
        return getattr(self, channel.value)

    def prices(self) -> dict:
        """Plain {channel: price} mapping."""
        return {channel.value: self.quote_for(channel).price for channel in Channel}


@dataclass
class PriceSheetRow:
    """One catalog product with its price on every channel."""

    product: Product
    base_price: Decimal | None
    result: CalculationResult | None = None

    @property
    def is_priced(self) -> bool:
        return self.result is not None


@dataclass
class PriceSheet:
    """Channel prices for a whole catalog."""

    direction: Direction
    config: FeeConfig
    rows: list[PriceSheetRow] = field(default_factory=list)
