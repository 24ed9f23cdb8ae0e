"""
Catalog DTOs for discount application.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class DiscountStatus(Enum):
    """Result of applying a discount."""
    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ApplyDiscountOutcome:
    """
    Tagged result of ApplyDiscountUseCase.execute.

    Infrastructure faults are raised instead of being reported here.

    Attributes:
        status: Applied, already applied, or product not found
        product_id: Target product
        discount_id: Requested discount
    """
    status: DiscountStatus
    product_id: str
    discount_id: str

    @classmethod
    def applied(cls, product_id: str, discount_id: str) -> ApplyDiscountOutcome:
        return cls(DiscountStatus.APPLIED, product_id, discount_id)

    @classmethod
    def already_applied(cls, product_id: str, discount_id: str) -> ApplyDiscountOutcome:
        return cls(DiscountStatus.ALREADY_APPLIED, product_id, discount_id)

    @classmethod
    def not_found(cls, product_id: str, discount_id: str) -> ApplyDiscountOutcome:
        return cls(DiscountStatus.NOT_FOUND, product_id, discount_id)

    @property
    def is_applied(self) -> bool:
        return self.status is DiscountStatus.APPLIED

    @property
    def is_satisfied(self) -> bool:
        """True when the discount is on the product, whether by this call or an earlier one."""
        return self.status in (DiscountStatus.APPLIED, DiscountStatus.ALREADY_APPLIED)
