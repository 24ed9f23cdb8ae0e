"""
Percentage Value Object

Discount totals and VAT rates as exact Decimal fractions.
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

HUNDRED = Decimal("100")
ONE = Decimal("1")


@dataclass(frozen=True)
class Percentage:
    """
    Immutable fraction (0.10 = 10%).

    Unbounded: stacked discounts may sum past 1.0 and the complement then
    goes negative.

    Attributes:
        value: The fraction as Decimal
    """
    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, "value", Decimal(str(self.value)))

    @classmethod
    def from_points(cls, points: Union[int, float, Decimal]) -> Percentage:
        """10 points -> 0.10"""
        return cls(Decimal(str(points)) / HUNDRED)

    def complement(self) -> Decimal:
        """Multiplier left after removing this fraction (1 - value), unclamped."""
        return ONE - self.value

    def markup(self) -> Decimal:
        """Multiplier for adding this fraction on top (1 + value)."""
        return ONE + self.value
