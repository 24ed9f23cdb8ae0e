"""
Database model package
Imports every SQLAlchemy model so Base.metadata sees them.
"""
from backend.app.models.product import ProductRecord, ProductDiscountRecord

__all__ = [
    "ProductRecord",
    "ProductDiscountRecord",
]
