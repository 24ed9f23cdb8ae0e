"""
Shared pytest fixtures
"""
from decimal import Decimal

import pytest

from src.domain.entities.product import Discount, Product
from src.domain.services.vat_registry import VatRegistry
from src.infrastructure.adapters.persistence.memory_product_adapter import (
    InMemoryProductStoreAdapter,
)


@pytest.fixture
def vat_registry():
    """Reference VAT table (Sweden 70%, French 65%, Italian 40%)"""
    return VatRegistry.default()


@pytest.fixture
def sample_product():
    """Swedish product, base price 100, no discounts"""
    return Product(
        id="P1",
        name="Oak Dining Table",
        base_price=Decimal("100"),
        country_code="Sweden",
    )


@pytest.fixture
def sample_catalog():
    """Small mixed-country catalog"""
    return [
        Product(id="P1", name="Oak Dining Table", base_price=Decimal("100"), country_code="Sweden"),
        Product(
            id="P2",
            name="Linen Armchair",
            base_price=Decimal("250"),
            country_code="Sweden",
            discounts=(Discount("WELCOME10", Decimal("10")),),
        ),
        Product(id="P3", name="Ceramic Lamp", base_price=Decimal("40"), country_code="French"),
    ]


@pytest.fixture
def memory_store(sample_catalog):
    """In-memory product store seeded with sample_catalog"""
    store = InMemoryProductStoreAdapter()
    for product in sample_catalog:
        store.add_product(product)
    return store
