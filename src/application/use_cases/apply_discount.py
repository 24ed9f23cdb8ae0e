"""
ApplyDiscountUseCase - Append a discount to a product at most once.

The uniqueness check lives inside the store's conditional write, never in a
separate read, so concurrent callers applying the same discount id cannot
both succeed. The store's single-document atomic update is the only
serialization point; no lock is taken here.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from src.application.dto.catalog import ApplyDiscountOutcome
from src.application.ports.outbound.product_store_port import (
    DuplicateDiscountError,
    ProductStorePort,
)
from src.domain.entities.product import MAX_ID_LENGTH, PERCENT_SCALE, Discount
from src.exceptions import (
    DatabaseOperationError,
    InvalidDiscountError,
    InvalidProductIdError,
)

logger = logging.getLogger(__name__)

MIN_PERCENT = Decimal("0")  # exclusive
MAX_PERCENT = Decimal("100")  # inclusive


class ApplyDiscountUseCase:
    """
    Use case for applying a discount to a product.

    Outcomes:
        APPLIED: exactly one document mutation
        ALREADY_APPLIED: the product already carries this discount id
        NOT_FOUND: the product does not exist
    """

    def __init__(self, product_store: ProductStorePort):
        """
        Initialize with required ports.

        Args:
            product_store: Product document store
        """
        self.product_store = product_store

    async def execute(
        self,
        product_id: Optional[str],
        discount_id: Optional[str],
        percent: Union[Decimal, int, float, str, None],
    ) -> ApplyDiscountOutcome:
        """
        Apply a discount.

        Safe to retry: a retry after an unacknowledged success returns
        ALREADY_APPLIED instead of applying twice.

        Args:
            product_id: Target product
            discount_id: Discount identifier, unique per product
            percent: Discount percentage points, 0 < percent <= 100,
                at most four decimal places

        Returns:
            ApplyDiscountOutcome

        Raises:
            InvalidDiscountError: percent out of range or too precise,
                discount_id blank or too long
            InvalidProductIdError: product_id blank or too long
            DatabaseOperationError: store failure
        """
        discount = self._validate(product_id, discount_id, percent)

        logger.debug(f"Applying discount {discount.discount_id} ({discount.percent}%) to {product_id}")

        try:
            result = await self.product_store.conditional_append_discount(product_id, discount)
        except DuplicateDiscountError:
            # Unique index rejected a write that raced past the filter
            logger.info(f"Discount {discount.discount_id} already applied to {product_id} (constraint)")
            return ApplyDiscountOutcome.already_applied(product_id, discount.discount_id)
        except DatabaseOperationError as e:
            logger.error(f"Discount append failed for {product_id}: {e}", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"Discount append failed for {product_id}: {e}", exc_info=True)
            raise DatabaseOperationError(
                "conditional_append_discount", f"productId: {product_id} Error: {e}", cause=e
            ) from e

        if result.modified:
            logger.info(f"Discount {discount.discount_id} applied to {product_id}")
            return ApplyDiscountOutcome.applied(product_id, discount.discount_id)

        if result.matched:
            raise DatabaseOperationError(
                "conditional_append_discount",
                f"productId: {product_id} matched but was not modified",
            )

        return await self._resolve_no_match(product_id, discount.discount_id)

    async def _resolve_no_match(self, product_id: str, discount_id: str) -> ApplyDiscountOutcome:
        """Zero-match means either missing product or existing discount; one existence check tells which."""
        try:
            product_exists = await self.product_store.exists(product_id)
        except DatabaseOperationError:
            raise
        except Exception as e:
            raise DatabaseOperationError(
                "exists", f"productId: {product_id} Error: {e}", cause=e
            ) from e

        if product_exists:
            logger.info(f"Discount {discount_id} already applied to {product_id}")
            return ApplyDiscountOutcome.already_applied(product_id, discount_id)

        logger.warning(f"Product not found while applying discount {discount_id}: {product_id}")
        return ApplyDiscountOutcome.not_found(product_id, discount_id)

    def _validate(
        self,
        product_id: Optional[str],
        discount_id: Optional[str],
        percent: Union[Decimal, int, float, str, None],
    ) -> Discount:
        """Validate input before any storage access."""
        value = self._parse_percent(percent)
        if value <= MIN_PERCENT or value > MAX_PERCENT:
            raise InvalidDiscountError(
                f"Discount percentage must be between 0 and 100, got {value}"
            )
        if value.normalize().as_tuple().exponent < -PERCENT_SCALE:
            raise InvalidDiscountError(
                f"Discount percentage allows at most {PERCENT_SCALE} decimal places, got {value}"
            )

        if product_id is None or not product_id.strip():
            raise InvalidProductIdError(product_id)
        if len(product_id) > MAX_ID_LENGTH:
            raise InvalidProductIdError(product_id, f"is longer than {MAX_ID_LENGTH} characters")

        if discount_id is None or not discount_id.strip():
            raise InvalidDiscountError("Discount ID is blank")
        if len(discount_id) > MAX_ID_LENGTH:
            raise InvalidDiscountError(f"Discount ID is longer than {MAX_ID_LENGTH} characters")

        return Discount(discount_id=discount_id, percent=value)

    @staticmethod
    def _parse_percent(percent: Union[Decimal, int, float, str, None]) -> Decimal:
        if percent is None or isinstance(percent, bool):
            raise InvalidDiscountError(f"Discount percentage is not a number: {percent!r}")
        try:
            value = percent if isinstance(percent, Decimal) else Decimal(str(percent))
        except (InvalidOperation, ValueError):
            raise InvalidDiscountError(f"Discount percentage is not a number: {percent!r}") from None
        if not value.is_finite():
            raise InvalidDiscountError(f"Discount percentage is not a number: {percent!r}")
        return value
