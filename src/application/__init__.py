"""
Application Layer - Use Cases and Ports

This module contains the application logic that orchestrates domain entities
and coordinates with external systems through ports (interfaces).

Structure:
- ports/outbound/: Interfaces that the application uses to communicate with external systems
- use_cases/: Application services implementing business use cases
- dto/: Data Transfer Objects for port communication
"""
from src.application.use_cases.apply_discount import ApplyDiscountUseCase
from src.application.use_cases.list_products_by_country import ListProductsByCountryUseCase

__all__ = [
    "ApplyDiscountUseCase",
    "ListProductsByCountryUseCase",
]
