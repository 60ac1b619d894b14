"""
Catalog Price Sheet

Prices every product of a catalog on all channels, for the catalog listing
and the printed price report. Each product is independent: a product with an
unusable base price gets an empty row instead of failing the sheet.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from .models import CalculationInput, Direction, PriceSheet, PriceSheetRow, Product
from .processor import FeeEngine

logger = logging.getLogger(__name__)


class PriceSheetBuilder:
    """Builds a PriceSheet from catalog products."""

    def __init__(self, engine: Optional[FeeEngine] = None):
        self.engine = engine or FeeEngine()

    def build(
        self,
        products: Iterable[Product],
        direction=Direction.REVERSE,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> PriceSheet:
        """
        Price each product's base price.

        By default the base price is what the seller wants to receive, so
        the sheet holds the list price to publish on each channel.
        """
        validator = self.engine.validator
        direction = validator.parse_direction(direction)
        config = self.engine.resolve_config(overrides)

        sheet = PriceSheet(direction=direction, config=config)
        for product in products:
            amount = validator.parse_amount(product.base_price)
            if amount is None:
                logger.info(f"Skipping pricing for product {product.product_id!r}: invalid base price")
                sheet.rows.append(PriceSheetRow(product=product, base_price=None))
                continue

            result = self.engine.compute(CalculationInput(amount=amount, direction=direction), config)
            sheet.rows.append(PriceSheetRow(product=product, base_price=amount, result=result))

        return sheet

    def build_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Build a price sheet from raw dictionary input.

        Expects `products` (list of {"id", "name", "base_price"}), optional
        `direction` and `overrides`.
        """
        raw_products = data.get("products")
        if not isinstance(raw_products, list):
            raise ValueError("products must be a list")
        if not all(isinstance(p, dict) for p in raw_products):
            raise ValueError("each product must be an object")

        products = [Product.from_dict(p) for p in raw_products]
        sheet = self.build(
            products,
            direction=data.get("direction", Direction.REVERSE.value),
            overrides=data.get("overrides"),
        )
        return self.engine.output_builder.build_price_sheet(sheet)
