"""
Product and Discount Domain Entities

A product document carries its country assignment and the ordered list of
discounts applied to it. Discounts are only ever appended.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

# Limits shared with the SQL schema
MAX_ID_LENGTH = 64
PERCENT_SCALE = 4  # fractional digits kept for a discount percent


@dataclass(frozen=True)
class Discount:
    """
    Named percentage reduction, immutable once appended.

    Attributes:
        discount_id: Identifier, unique within a product
        percent: Percentage points (10 = 10%)
    """
    discount_id: str
    percent: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.percent, Decimal):
            object.__setattr__(self, "percent", Decimal(str(self.percent)))


@dataclass(frozen=True)
class Product:
    """
    Product document.

    Attributes:
        id: Externally assigned identifier
        name: Display name
        base_price: Non-negative price before discounts and VAT
        country_code: Country the product is sold in (VAT registry key)
        discounts: Applied discounts, in application order
    """
    id: str
    name: str
    base_price: Decimal
    country_code: str
    discounts: Tuple[Discount, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.base_price, Decimal):
            object.__setattr__(self, "base_price", Decimal(str(self.base_price)))
        if not isinstance(self.discounts, tuple):
            object.__setattr__(self, "discounts", tuple(self.discounts))

        if self.base_price < Decimal("0"):
            raise ValueError(f"Base price cannot be negative: {self.base_price}")

        seen = set()
        for discount in self.discounts:
            if discount.discount_id in seen:
                raise ValueError(
                    f"Duplicate discount {discount.discount_id} on product {self.id}"
                )
            seen.add(discount.discount_id)

    def has_discount(self, discount_id: str) -> bool:
        """Check whether a discount with this identifier is already applied."""
        return self.find_discount(discount_id) is not None

    def find_discount(self, discount_id: str) -> Optional[Discount]:
        for discount in self.discounts:
            if discount.discount_id == discount_id:
                return discount
        return None

    def with_discount(self, discount: Discount) -> Product:
        """Return a copy with the discount appended."""
        return Product(
            id=self.id,
            name=self.name,
            base_price=self.base_price,
            country_code=self.country_code,
            discounts=self.discounts + (discount,),
        )
