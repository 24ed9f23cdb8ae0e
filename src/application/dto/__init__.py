"""Data Transfer Objects for application layer."""
from src.application.dto.catalog import ApplyDiscountOutcome, DiscountStatus

__all__ = [
    "ApplyDiscountOutcome",
    "DiscountStatus",
]
