"""
VatRegistry Domain Service

Fixed, read-only mapping from country code to VAT rate. Built once at
startup from configuration and passed to consumers.
"""
from __future__ import annotations
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from src.exceptions import InvalidCountryError


# Reference deployment table
DEFAULT_VAT_RATES: Mapping[str, Decimal] = MappingProxyType({
    "Sweden": Decimal("0.70"),
    "French": Decimal("0.65"),
    "Italian": Decimal("0.40"),
})


class VatRegistry:
    """
    Country code to VAT rate lookup.

    Codes are matched exactly (case-sensitive).
    """

    def __init__(self, rates: Mapping[str, Union[Decimal, float, str]]):
        """
        Args:
            rates: Country code -> VAT rate as a fraction (0.70 = 70%)
        """
        normalized = {}
        for code, rate in rates.items():
            rate = rate if isinstance(rate, Decimal) else Decimal(str(rate))
            if not code or not code.strip():
                raise ValueError("Country code cannot be blank")
            if not rate.is_finite() or rate < Decimal("0"):
                raise ValueError(f"VAT rate for {code} must be a non-negative number: {rate}")
            normalized[code] = rate
        self._rates: Mapping[str, Decimal] = MappingProxyType(normalized)

    @classmethod
    def default(cls) -> VatRegistry:
        """Create registry with the reference deployment rates."""
        return cls(DEFAULT_VAT_RATES)

    def rate_for(self, country_code: Optional[str]) -> Decimal:
        """
        Get VAT rate for a country.

        Raises:
            InvalidCountryError: If the code is None, blank or unknown
        """
        if country_code is None or not country_code.strip():
            raise InvalidCountryError(country_code)
        try:
            return self._rates[country_code]
        except KeyError:
            raise InvalidCountryError(country_code) from None

    def is_known(self, country_code: Optional[str]) -> bool:
        """Non-raising variant of rate_for, for pre-validation."""
        if country_code is None or not country_code.strip():
            return False
        return country_code in self._rates

    @property
    def countries(self) -> Tuple[str, ...]:
        return tuple(self._rates)

    @property
    def rates(self) -> Mapping[str, Decimal]:
        """Read-only view of the table."""
        return self._rates

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"VatRegistry({dict(self._rates)})"
