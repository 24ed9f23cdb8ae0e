"""
Application Use Cases.

This module contains the business use cases that orchestrate
domain logic through port interfaces.
"""
from src.application.use_cases.apply_discount import ApplyDiscountUseCase
from src.application.use_cases.list_products_by_country import ListProductsByCountryUseCase

__all__ = [
    "ApplyDiscountUseCase",
    "ListProductsByCountryUseCase",
]
