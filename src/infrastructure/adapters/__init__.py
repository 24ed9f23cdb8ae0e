"""Infrastructure adapters."""
from src.infrastructure.adapters.persistence.memory_product_adapter import InMemoryProductStoreAdapter

__all__ = [
    "InMemoryProductStoreAdapter",
]
