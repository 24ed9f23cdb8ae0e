"""
Domain Layer - Pure Business Logic

This module contains the core domain logic with zero external dependencies.
All business rules, entities, value objects, and domain services reside here.

Structure:
- entities/: Core business entities (Product, Discount)
- value_objects/: Immutable value objects (Percentage, PriceQuote)
- services/: Domain services (VatRegistry, price calculation)
"""
