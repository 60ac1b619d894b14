"""
Unit Tests for Output Builder
"""

from decimal import Decimal

from pricing import FeeEngine
from pricing.models import Direction
from pricing.output import OutputBuilder, _fmt, to_money


class TestFormatting:

    def test_to_money_rounds(self):
        assert to_money(Decimal("105.620461")) == 105.62

    def test_to_money_exact(self):
        assert to_money(Decimal("130")) == 130.0

    def test_fmt_uses_brazilian_separators(self):
        assert _fmt(Decimal("1234.5")) == "R$ 1.234,50"
        assert _fmt(Decimal("0.35")) == "R$ 0,35"


class TestDescriptions:

    def test_reverse_descriptions(self):
        result = FeeEngine().process_from_dict({"amount": 100})
        channels = result["channels"]
        assert channels["flat_rate"]["description"] == (
            "(net (R$ 100,00) + fixed (R$ 0,35)) / (1 - 4.99%) = R$ 105,62"
        )
        assert "service fee (R$ 2,99)" in channels["bracketed"]["description"]

    def test_capped_description(self):
        result = FeeEngine().process_from_dict({"amount": 600})
        assert result["channels"]["capped"]["description"] == (
            "net (R$ 600,00) + capped commission (R$ 105,00) + fixed (R$ 4,00) = R$ 709,00"
        )

    def test_forward_description(self):
        result = FeeEngine().process_from_dict({"amount": 100, "direction": "forward"})
        assert result["channels"]["capped"]["description"] == (
            "gross (R$ 100,00) - commission (20%) (R$ 20,00) - fixed (R$ 4,00) = R$ 76,00"
        )

    def test_fee_summaries(self):
        channels = FeeEngine().process_from_dict({"amount": 10})["channels"]
        assert channels["flat_rate"]["fee_summary"] == "Taxa 4.99% + R$ 0,35"
        assert channels["capped"]["fee_summary"] == "Taxa 20% + R$ 4,00 (comissão máx. R$ 105,00)"
        assert channels["bracketed"]["fee_summary"].endswith("tarifa de serviço por faixa")

    def test_no_result(self):
        assert OutputBuilder().build_no_result(Direction.REVERSE)["status"] == "no_result"
