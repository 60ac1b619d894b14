"""
Output Builder

Constructs API responses from calculation results. This is the only place
where money is rounded.
"""

from decimal import Decimal

from .models import (
    CalculationResult,
    Channel,
    ChannelQuote,
    Direction,
    FeeConfig,
    FeeSchedule,
    PriceSheet,
    PriceSheetRow,
)


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def _fmt(value) -> str:
    """Format a number as a BRL currency string for descriptions."""
    text = f"{value:,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def _pct(value: Decimal) -> str:
    return f"{float(value):g}%"


class OutputBuilder:
    """Builds the final output response."""

    def build(self, result: CalculationResult, config: FeeConfig) -> dict:
        """Construct the response for a single calculation."""
        return {
            "status": "ok",
            "direction": result.direction.value,
            "amount": to_money(result.amount),
            "channels": {
                channel.value: self._build_channel(
                    result.quote_for(channel),
                    config.schedule_for(channel),
                    result.direction,
                )
                for channel in Channel
            },
        }

    def build_no_result(self, direction: Direction) -> dict:
        """Response for an amount that could not be priced."""
        return {
            "status": "no_result",
            "direction": direction.value,
            "amount": None,
            "channels": None,
        }

    def build_service_fee(self, gross_price: Decimal | None, fee: Decimal | None) -> dict:
        if fee is None:
            return {"status": "no_result", "gross_price": None, "service_fee": None}
        return {
            "status": "ok",
            "gross_price": to_money(gross_price),
            "service_fee": to_money(fee),
        }

    def build_price_sheet(self, sheet: PriceSheet) -> dict:
        return {
            "status": "ok",
            "direction": sheet.direction.value,
            "products": [self._build_row(row, sheet) for row in sheet.rows],
        }

    def _build_row(self, row: PriceSheetRow, sheet: PriceSheet) -> dict:
        product = row.product
        return {
            "id": product.product_id,
            "name": product.name,
            "base_price": to_money(row.base_price) if row.base_price is not None else None,
            "channels": {
                channel.value: to_money(row.result.quote_for(channel).price)
                for channel in Channel
            } if row.is_priced else None,
        }

    def _build_channel(
        self, quote: ChannelQuote, schedule: FeeSchedule, direction: Direction
    ) -> dict:
        return {
            "label": schedule.label,
            "value": to_money(quote.price),
            "gross": to_money(quote.gross),
            "net": to_money(quote.net),
            "commission": to_money(quote.commission),
            "fixed_fee": to_money(quote.fixed_fee),
            "service_fee": to_money(quote.service_fee),
            "cap_applied": quote.cap_applied,
            "consistent": quote.consistent,
            "fee_summary": self._fee_summary(schedule),
            "description": self._describe(quote, schedule, direction),
        }

    def _fee_summary(self, schedule: FeeSchedule) -> str:
        summary = f"Taxa {_pct(schedule.percent_rate)} + {_fmt(schedule.fixed_fee)}"
        if schedule.commission_cap is not None:
            summary += f" (comissão máx. {_fmt(schedule.commission_cap)})"
        if schedule.service_fee_brackets:
            summary += " + tarifa de serviço por faixa"
        return summary

    def _describe(self, quote: ChannelQuote, schedule: FeeSchedule, direction: Direction) -> str:
        service = f" + service fee ({_fmt(quote.service_fee)})" if quote.service_fee else ""

        if direction is Direction.REVERSE:
            if quote.cap_applied:
                return (
                    f"net ({_fmt(quote.net)}) + capped commission ({_fmt(quote.commission)}) "
                    f"+ fixed ({_fmt(quote.fixed_fee)}) = {_fmt(quote.gross)}"
                )
            return (
                f"(net ({_fmt(quote.net)}) + fixed ({_fmt(quote.fixed_fee)}){service}) "
                f"/ (1 - {_pct(schedule.percent_rate)}) = {_fmt(quote.gross)}"
            )

        commission = "capped commission" if quote.cap_applied else f"commission ({_pct(schedule.percent_rate)})"
        service = f" - service fee ({_fmt(quote.service_fee)})" if quote.service_fee else ""
        return (
            f"gross ({_fmt(quote.gross)}) - {commission} ({_fmt(quote.commission)}) "
            f"- fixed ({_fmt(quote.fixed_fee)}){service} = {_fmt(quote.net)}"
        )
