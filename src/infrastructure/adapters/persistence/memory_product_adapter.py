"""
InMemoryProductStoreAdapter - In-memory implementation of ProductStorePort.

This adapter provides an in-memory document store for testing purposes.
All data is lost when the adapter is destroyed.
"""
import asyncio
import threading
from typing import Dict, List, Optional

from src.application.ports.outbound.product_store_port import AppendResult, ProductStorePort
from src.domain.entities.product import Discount, Product
from src.exceptions import DatabaseOperationError


class InMemoryProductStoreAdapter(ProductStorePort):
    """
    In-memory product store.

    Each conditional append runs under a lock, standing in for a document
    store's single-document atomic update. The lock is the store's, not the
    caller's: the discount engine never sees it.
    """

    def __init__(self, latency_seconds: float = 0.0):
        """
        Args:
            latency_seconds: Simulated round-trip delay before each operation
        """
        # Dict[product_id, Product]
        self._products: Dict[str, Product] = {}
        self._lock = threading.Lock()
        self._latency_seconds = latency_seconds
        self._is_healthy = True
        self.write_count = 0

    def clear(self):
        """Clear all stored products. Useful for test cleanup."""
        with self._lock:
            self._products.clear()
            self.write_count = 0

    def add_product(self, product: Product) -> None:
        """Insert or replace a product document (catalog ingestion stand-in)."""
        with self._lock:
            self._products[product.id] = product

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a stored product (for testing)."""
        return self._products.get(product_id)

    def set_healthy(self, healthy: bool) -> None:
        """Simulate store outage when False."""
        self._is_healthy = healthy

    async def _round_trip(self, operation: str) -> None:
        await asyncio.sleep(self._latency_seconds)
        if not self._is_healthy:
            raise DatabaseOperationError(operation, "in-memory store is unavailable")

    async def find_by_country(self, country_code: str) -> List[Product]:
        """Get products for a country."""
        await self._round_trip("find_by_country")
        with self._lock:
            return [p for p in self._products.values() if p.country_code == country_code]

    async def conditional_append_discount(
        self,
        product_id: str,
        discount: Discount,
    ) -> AppendResult:
        """Append discount if the product exists and lacks this discount id."""
        await self._round_trip("conditional_append_discount")
        with self._lock:
            product = self._products.get(product_id)
            if product is None or product.has_discount(discount.discount_id):
                return AppendResult.no_match()
            self._products[product_id] = product.with_discount(discount)
            self.write_count += 1
            return AppendResult.applied()

    async def exists(self, product_id: str) -> bool:
        """Check if a product exists."""
        await self._round_trip("exists")
        return product_id in self._products

    @property
    def product_count(self) -> int:
        """Get total number of products stored (for testing)."""
        return len(self._products)
