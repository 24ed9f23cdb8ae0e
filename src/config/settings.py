"""
Catalog settings
Environment variables take precedence; values are validated on load.
"""
import os
from decimal import Decimal, InvalidOperation
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv

from src.domain.services.vat_registry import DEFAULT_VAT_RATES
from src.exceptions import ConfigurationError

load_dotenv()


def get_env_decimal(
    key: str,
    default: Decimal,
    min_value: Optional[Decimal] = None,
    max_value: Optional[Decimal] = None,
) -> Decimal:
    """Get a Decimal value from the environment (validated)"""
    value = os.getenv(key)
    if value is None:
        return default

    try:
        decimal_value = Decimal(value)
    except InvalidOperation:
        raise ConfigurationError(key, f"cannot convert to a number: {value}")
    if not decimal_value.is_finite():
        raise ConfigurationError(key, f"not a finite number: {value}")
    if min_value is not None and decimal_value < min_value:
        raise ConfigurationError(key, f"value is below the minimum ({min_value}): {decimal_value}")
    if max_value is not None and decimal_value > max_value:
        raise ConfigurationError(key, f"value is above the maximum ({max_value}): {decimal_value}")
    return decimal_value


def parse_vat_rates(raw: str, key: str = "CATALOG_VAT_RATES") -> Dict[str, Decimal]:
    """
    Parse a VAT table from "Country=rate" pairs separated by commas.

    Example:
        >>> parse_vat_rates("Sweden=0.70,French=0.65")
        {'Sweden': Decimal('0.70'), 'French': Decimal('0.65')}

    Raises:
        ConfigurationError: On malformed entries, duplicates or bad rates
    """
    rates: Dict[str, Decimal] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        country, sep, rate_text = entry.partition("=")
        country = country.strip()
        if not sep or not country:
            raise ConfigurationError(key, f"expected Country=rate, got: {entry}")
        try:
            rate = Decimal(rate_text.strip())
        except InvalidOperation:
            raise ConfigurationError(key, f"VAT rate for {country} is not a number: {rate_text}")
        if not rate.is_finite() or rate < Decimal("0"):
            raise ConfigurationError(key, f"VAT rate for {country} must be non-negative: {rate_text}")
        if country in rates:
            raise ConfigurationError(key, f"duplicate country: {country}")
        rates[country] = rate

    if not rates:
        raise ConfigurationError(key, "VAT table is empty")
    return rates


def load_vat_rates() -> Mapping[str, Decimal]:
    """VAT table from CATALOG_VAT_RATES, or the reference table when unset."""
    raw = os.getenv("CATALOG_VAT_RATES")
    if raw is None or not raw.strip():
        return dict(DEFAULT_VAT_RATES)
    return parse_vat_rates(raw)


class CatalogConfig:
    """Catalog settings"""
    VAT_RATES = load_vat_rates()
    MAX_VAT_RATE = get_env_decimal("CATALOG_MAX_VAT_RATE", Decimal("1"), min_value=Decimal("0"))

    @classmethod
    def validate(cls):
        """Validate catalog settings"""
        for country, rate in cls.VAT_RATES.items():
            if rate > cls.MAX_VAT_RATE:
                raise ConfigurationError(
                    "CATALOG_VAT_RATES",
                    f"VAT rate for {country} exceeds {cls.MAX_VAT_RATE}: {rate}",
                )


def validate_all_configs():
    """Validate every settings group"""
    CatalogConfig.validate()
