# Outbound ports (external system interfaces)
from src.application.ports.outbound.product_store_port import (
    ProductStorePort,
    AppendResult,
    DuplicateDiscountError,
)

__all__ = [
    "ProductStorePort",
    "AppendResult",
    "DuplicateDiscountError",
]
