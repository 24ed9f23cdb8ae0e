"""Domain entities."""
from src.domain.entities.product import Product, Discount

__all__ = [
    "Product",
    "Discount",
]
