"""
Product API endpoints
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from backend.app.api.deps import get_container
from backend.app.schemas.product import (
    ApplyDiscountRequest,
    ApplyDiscountResponse,
    ProductQuoteResponse,
)
from backend.app.services.metrics import record_discount_outcome, record_quotes_served
from src.application.dto.catalog import DiscountStatus
from src.container import Container
from src.exceptions import DiscountAlreadyAppliedError, ProductNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ProductQuoteResponse])
async def get_products(
    country: Optional[str] = Query(None, description="Country code (e.g. Sweden)"),
    container: Container = Depends(get_container),
) -> List[ProductQuoteResponse]:
    """
    List products for a country with computed final prices

    - **country**: exact country code; missing, blank or unknown returns 400
    """
    logger.info(f"Getting products for country: {country}")
    quotes = await container.get_list_products_use_case().execute(country)
    record_quotes_served(country, len(quotes))
    return [ProductQuoteResponse.from_quote(quote) for quote in quotes]


@router.put("/{product_id}/discount", response_model=ApplyDiscountResponse)
async def apply_discount(
    product_id: str,
    request: ApplyDiscountRequest,
    container: Container = Depends(get_container),
) -> ApplyDiscountResponse:
    """
    Apply a discount to a product

    Returns 409 when the discount ID is already on the product, 404 when the
    product does not exist.
    """
    logger.info(f"Updating discount for product: {product_id}")
    outcome = await container.get_apply_discount_use_case().execute(
        product_id, request.discount_id, request.percent
    )
    record_discount_outcome(outcome.status.value)

    if outcome.status is DiscountStatus.NOT_FOUND:
        raise ProductNotFoundError(product_id)
    if outcome.status is DiscountStatus.ALREADY_APPLIED:
        raise DiscountAlreadyAppliedError(product_id, request.discount_id)

    return ApplyDiscountResponse.from_outcome(outcome)
