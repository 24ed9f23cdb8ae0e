"""
Infrastructure Layer - External System Adapters

This module contains adapters that implement the application ports,
handling communication with external systems like databases.

Structure:
- adapters/persistence/: Product store adapters (PostgreSQL, in-memory)
"""
from src.infrastructure.adapters.persistence.memory_product_adapter import InMemoryProductStoreAdapter

__all__ = [
    "InMemoryProductStoreAdapter",
]
