"""
Dependency Injection Container.

This module provides a central container for wiring dependencies
following the Dependency Inversion Principle.

Usage:
    # Production
    container = Container.create_from_session_factory(AsyncSessionLocal)
    apply_discount = container.get_apply_discount_use_case()

    # Testing
    container = Container.create_for_testing()
    # or with custom mocks
    container = Container(product_store_port=mock_store)
"""
from typing import Optional

from src.application.ports.outbound.product_store_port import ProductStorePort
from src.application.use_cases.apply_discount import ApplyDiscountUseCase
from src.application.use_cases.list_products_by_country import ListProductsByCountryUseCase
from src.domain.services.vat_registry import VatRegistry


class Container:
    """
    Dependency Injection Container.

    Manages the creation and wiring of application dependencies.
    Port instances and use cases are created once and reused.
    """

    def __init__(
        self,
        product_store_port: Optional[ProductStorePort] = None,
        vat_registry: Optional[VatRegistry] = None,
        session_factory=None,
    ):
        """
        Initialize container with optional overrides.

        Args:
            product_store_port: Product store implementation (SQL adapter if None)
            vat_registry: VAT table (CatalogConfig.VAT_RATES if None)
            session_factory: Async session factory for the SQL adapter
                (backend AsyncSessionLocal if None)
        """
        self._product_store_port = product_store_port
        self._vat_registry = vat_registry
        self._session_factory = session_factory

        # Cached use cases
        self._apply_discount_use_case: Optional[ApplyDiscountUseCase] = None
        self._list_products_use_case: Optional[ListProductsByCountryUseCase] = None

    @classmethod
    def create_for_testing(cls) -> "Container":
        """
        Create container with in-memory adapters for testing.

        Returns:
            Container with test adapters
        """
        from src.infrastructure.adapters.persistence.memory_product_adapter import (
            InMemoryProductStoreAdapter,
        )

        return cls(
            product_store_port=InMemoryProductStoreAdapter(),
            vat_registry=VatRegistry.default(),
        )

    @classmethod
    def create_from_session_factory(
        cls,
        session_factory,
        vat_registry: Optional[VatRegistry] = None,
    ) -> "Container":
        """
        Create container backed by the SQL product store.

        Args:
            session_factory: Async session factory (e.g., async_sessionmaker)
            vat_registry: VAT table override
        """
        return cls(session_factory=session_factory, vat_registry=vat_registry)

    # --- Ports ---

    def get_product_store_port(self) -> ProductStorePort:
        """Get product store port (SQL adapter by default)."""
        if self._product_store_port is None:
            from src.infrastructure.adapters.persistence.postgres_product_adapter import (
                PostgresProductStoreAdapter,
            )

            session_factory = self._session_factory
            if session_factory is None:
                from backend.app.db.session import AsyncSessionLocal
                session_factory = AsyncSessionLocal
            self._product_store_port = PostgresProductStoreAdapter(session_factory)
        return self._product_store_port

    def get_vat_registry(self) -> VatRegistry:
        """Get VAT registry, loaded once from configuration."""
        if self._vat_registry is None:
            from src.config.settings import CatalogConfig

            CatalogConfig.validate()
            self._vat_registry = VatRegistry(CatalogConfig.VAT_RATES)
        return self._vat_registry

    # --- Use Cases ---

    def get_apply_discount_use_case(self) -> ApplyDiscountUseCase:
        """Get ApplyDiscountUseCase with wired dependencies."""
        if self._apply_discount_use_case is None:
            self._apply_discount_use_case = ApplyDiscountUseCase(
                product_store=self.get_product_store_port(),
            )
        return self._apply_discount_use_case

    def get_list_products_use_case(self) -> ListProductsByCountryUseCase:
        """Get ListProductsByCountryUseCase with wired dependencies."""
        if self._list_products_use_case is None:
            self._list_products_use_case = ListProductsByCountryUseCase(
                product_store=self.get_product_store_port(),
                vat_registry=self.get_vat_registry(),
            )
        return self._list_products_use_case

    async def close(self) -> None:
        """Release port resources."""
        if self._product_store_port is not None:
            await self._product_store_port.close()
