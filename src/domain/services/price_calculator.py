"""
Price Calculator Domain Service

final price = base price * (1 - sum(discount percents) / 100) * (1 + VAT)

Discounts are additive, not compounded: 10% and 15% remove exactly 25%.
The discount fraction is not clamped, so stacked discounts above 100% yield a
negative price. VAT is a markup on the discounted base.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Iterable, Union

from src.domain.entities.product import Discount
from src.domain.value_objects.percentage import Percentage


Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def total_discount(discounts: Iterable[Discount]) -> Percentage:
    """Sum of discount percents as a single fraction."""
    points = sum((d.percent for d in discounts), Decimal("0"))
    return Percentage.from_points(points)


def calculate_final_price(
    base_price: Number,
    vat_rate: Number,
    discounts: Iterable[Discount],
) -> Decimal:
    """
    Compute the final price of a product.

    Args:
        base_price: Price before discounts and VAT
        vat_rate: VAT as a fraction (0.70 = 70%)
        discounts: Applied discounts, any number

    Returns:
        Exact Decimal result, unrounded
    """
    base = _to_decimal(base_price)
    vat = Percentage(_to_decimal(vat_rate))
    return base * total_discount(discounts).complement() * vat.markup()
