"""Configuration module"""
from .settings import CatalogConfig, parse_vat_rates

__all__ = ['CatalogConfig', 'parse_vat_rates']
