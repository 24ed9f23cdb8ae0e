"""
ListProductsByCountryUseCase - Read products for a country with final prices.
"""
import logging
from typing import List, Optional

from src.application.ports.outbound.product_store_port import ProductStorePort
from src.domain.services.vat_registry import VatRegistry
from src.domain.value_objects.price_quote import PriceQuote
from src.exceptions import DatabaseOperationError

logger = logging.getLogger(__name__)


class ListProductsByCountryUseCase:
    """
    Use case for the catalog read path.

    Validates the country, fetches matching products, and prices each one
    from its current discount list. Never writes.
    """

    def __init__(self, product_store: ProductStorePort, vat_registry: VatRegistry):
        """
        Initialize with required ports.

        Args:
            product_store: Product document store
            vat_registry: Country to VAT rate table
        """
        self.product_store = product_store
        self.vat_registry = vat_registry

    async def execute(self, country_code: Optional[str]) -> List[PriceQuote]:
        """
        List price quotes for a country.

        Args:
            country_code: Country code from the request

        Returns:
            One PriceQuote per product; empty when nothing matches

        Raises:
            InvalidCountryError: country is None, blank or unknown
            DatabaseOperationError: the store read failed
        """
        vat_rate = self.vat_registry.rate_for(country_code)

        try:
            products = await self.product_store.find_by_country(country_code)
        except DatabaseOperationError:
            raise
        except Exception as e:
            raise DatabaseOperationError(
                "find_by_country",
                f"Failed to fetch products for country: {country_code} Error: {e}",
                cause=e,
            ) from e

        logger.debug(f"Pricing {len(products)} products for {country_code} (VAT {vat_rate})")
        return [PriceQuote.for_product(product, vat_rate) for product in products]
