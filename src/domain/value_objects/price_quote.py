"""
PriceQuote Value Object

Derived, non-persisted view of a product's price. Recomputed on every read.
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from src.domain.entities.product import Discount, Product
from src.domain.services.price_calculator import calculate_final_price


@dataclass(frozen=True)
class PriceQuote:
    """
    Attributes:
        product_id: Product identifier
        name: Product name
        country_code: Country the quote was computed for
        base_price: Price before discounts and VAT
        vat_rate: VAT fraction used
        discounts: Snapshot of the discounts at read time
        final_price: Computed price
    """
    product_id: str
    name: str
    country_code: str
    base_price: Decimal
    vat_rate: Decimal
    discounts: Tuple[Discount, ...]
    final_price: Decimal

    @classmethod
    def for_product(cls, product: Product, vat_rate: Decimal) -> PriceQuote:
        """Build a quote from the product's current discount list."""
        return cls(
            product_id=product.id,
            name=product.name,
            country_code=product.country_code,
            base_price=product.base_price,
            vat_rate=vat_rate,
            discounts=product.discounts,
            final_price=calculate_final_price(
                product.base_price, vat_rate, product.discounts
            ),
        )
