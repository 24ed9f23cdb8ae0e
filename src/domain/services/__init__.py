"""Domain services."""
from src.domain.services.vat_registry import VatRegistry, DEFAULT_VAT_RATES
from src.domain.services.price_calculator import calculate_final_price, total_discount

__all__ = [
    "VatRegistry",
    "DEFAULT_VAT_RATES",
    "calculate_final_price",
    "total_discount",
]
