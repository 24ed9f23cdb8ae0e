"""
ProductStorePort - Interface for the product document store.

This port defines the narrow contract the discount engine and the catalog
query use against the store:

- find_by_country: read every product document assigned to a country
- conditional_append_discount: append a discount in one atomic
  filter-and-update, filtered on "product exists AND no discount with this id"
- exists: cheap existence check, used only to disambiguate a zero-match append

Implementations must surface connection faults and timeouts as
DatabaseOperationError and must never block indefinitely.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from src.domain.entities.product import Discount, Product


@dataclass(frozen=True)
class AppendResult:
    """
    Outcome of a conditional append.

    Attributes:
        matched: The filter selected a document
        modified: The document was changed
    """
    matched: bool
    modified: bool

    @classmethod
    def applied(cls) -> "AppendResult":
        return cls(matched=True, modified=True)

    @classmethod
    def no_match(cls) -> "AppendResult":
        return cls(matched=False, modified=False)


class ProductStorePort(ABC):
    """
    Port interface for product document storage.

    Usage:
        result = await store.conditional_append_discount(product_id, discount)
        if result.modified:
            ...  # applied
        elif not result.matched and await store.exists(product_id):
            ...  # discount was already there
    """

    @abstractmethod
    async def find_by_country(self, country_code: str) -> List[Product]:
        """
        Get all products whose stored country equals country_code.

        Args:
            country_code: Exact country code

        Returns:
            Products with their discounts in application order (may be empty)

        Raises:
            DatabaseOperationError: If the read fails
        """
        pass

    @abstractmethod
    async def conditional_append_discount(
        self,
        product_id: str,
        discount: Discount,
    ) -> AppendResult:
        """
        Append a discount to a product in a single atomic operation.

        The write only applies when the product exists and none of its
        discounts has discount.discount_id.

        Args:
            product_id: Target product
            discount: Discount to append

        Returns:
            AppendResult with matched/modified flags

        Raises:
            DuplicateDiscountError: If a uniqueness constraint on
                (product_id, discount_id) rejected the write
            DatabaseOperationError: If the write fails
        """
        pass

    @abstractmethod
    async def exists(self, product_id: str) -> bool:
        """
        Check if a product exists.

        Raises:
            DatabaseOperationError: If the read fails
        """
        pass

    async def close(self) -> None:
        """Release store resources. No-op by default."""
        return None


class DuplicateDiscountError(Exception):
    """Raised when the store's unique constraint on (product_id, discount_id) fires."""

    def __init__(self, product_id: str, discount_id: str):
        super().__init__(f"Duplicate discount {discount_id} on product {product_id}")
        self.product_id = product_id
        self.discount_id = discount_id
