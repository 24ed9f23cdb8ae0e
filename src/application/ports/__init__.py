"""Application ports (interfaces)."""
from src.application.ports.outbound.product_store_port import ProductStorePort

__all__ = [
    "ProductStorePort",
]
