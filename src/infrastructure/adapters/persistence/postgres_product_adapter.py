"""
PostgresProductStoreAdapter - SQLAlchemy implementation of ProductStorePort.

Products live in the products table; discounts in product_discounts, ordered
by insertion sequence, with a unique constraint on (product_id, discount_id).

The conditional append is one statement:

    INSERT INTO product_discounts (product_id, discount_id, percent, applied_at)
    SELECT :product_id, :discount_id, :percent, :applied_at
    WHERE EXISTS (SELECT ... FROM products WHERE id = :product_id)
      AND NOT EXISTS (SELECT ... FROM product_discounts
                      WHERE product_id = :product_id AND discount_id = :discount_id)
    RETURNING seq

Two concurrent statements can both pass NOT EXISTS under READ COMMITTED;
the unique constraint then rejects the second one with IntegrityError.
"""
import asyncio
import logging
from datetime import datetime
from typing import List

from sqlalchemy import DateTime, Numeric, String, insert, literal, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.application.ports.outbound.product_store_port import (
    AppendResult,
    DuplicateDiscountError,
    ProductStorePort,
)
from src.domain.entities.product import MAX_ID_LENGTH, PERCENT_SCALE, Discount, Product
from src.exceptions import DatabaseOperationError
from backend.app.models.product import ProductDiscountRecord, ProductRecord

logger = logging.getLogger(__name__)

# Driver faults surfaced as DatabaseOperationError
STORE_FAULTS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class PostgresProductStoreAdapter(ProductStorePort):
    """
    PostgreSQL-based product store.

    Also runs on SQLite (aiosqlite) for tests; the statements are portable.
    """

    def __init__(self, session_factory):
        """
        Initialize the adapter.

        Args:
            session_factory: Async session factory (e.g., async_sessionmaker)
        """
        self._session_factory = session_factory

    async def _get_session(self) -> AsyncSession:
        """Get a new database session."""
        return self._session_factory()

    async def find_by_country(self, country_code: str) -> List[Product]:
        """
        Get all products for a country.

        Args:
            country_code: Exact country code

        Returns:
            Products ordered by ID, discounts in application order
        """
        async with await self._get_session() as session:
            try:
                result = await session.execute(
                    select(ProductRecord)
                    .where(ProductRecord.country == country_code)
                    .options(selectinload(ProductRecord.discounts))
                    .order_by(ProductRecord.id)
                )
                records = result.scalars().all()
                return [self._to_entity(record) for record in records]
            except STORE_FAULTS as e:
                logger.error(f"find_by_country failed for {country_code}: {e}")
                raise DatabaseOperationError(
                    "find_by_country",
                    f"Failed to fetch products for country: {country_code} Error: {e}",
                    cause=e,
                ) from e

    async def conditional_append_discount(
        self,
        product_id: str,
        discount: Discount,
    ) -> AppendResult:
        """
        Append a discount in one INSERT ... SELECT round trip.

        Returns:
            AppendResult.applied() when a row was inserted,
            AppendResult.no_match() when the filter excluded the write

        Raises:
            DuplicateDiscountError: unique constraint rejected the row
            DatabaseOperationError: any other store failure
        """
        statement = self._build_append_statement(product_id, discount, datetime.now())

        async with await self._get_session() as session:
            try:
                result = await session.execute(statement)
                inserted_seq = result.scalar_one_or_none()
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.debug(f"Discount {discount.discount_id} on {product_id} rejected by constraint")
                raise DuplicateDiscountError(product_id, discount.discount_id) from e
            except STORE_FAULTS as e:
                await session.rollback()
                logger.error(f"conditional_append_discount failed for {product_id}: {e}")
                raise DatabaseOperationError(
                    "conditional_append_discount",
                    f"productId: {product_id} Error: {e}",
                    cause=e,
                ) from e

        if inserted_seq is None:
            return AppendResult.no_match()
        return AppendResult.applied()

    async def exists(self, product_id: str) -> bool:
        """Check if a product exists."""
        async with await self._get_session() as session:
            try:
                result = await session.execute(
                    select(ProductRecord.id).where(ProductRecord.id == product_id)
                )
                return result.scalar_one_or_none() is not None
            except STORE_FAULTS as e:
                logger.error(f"exists failed for {product_id}: {e}")
                raise DatabaseOperationError(
                    "exists", f"productId: {product_id} Error: {e}", cause=e
                ) from e

    @staticmethod
    def _build_append_statement(product_id: str, discount: Discount, applied_at: datetime):
        product_exists = (
            select(ProductRecord.id)
            .where(ProductRecord.id == product_id)
            .correlate(None)
            .exists()
        )
        already_applied = (
            select(ProductDiscountRecord.seq)
            .where(
                ProductDiscountRecord.product_id == product_id,
                ProductDiscountRecord.discount_id == discount.discount_id,
            )
            .correlate(None)
            .exists()
        )
        source = select(
            literal(product_id, String(MAX_ID_LENGTH)),
            literal(discount.discount_id, String(MAX_ID_LENGTH)),
            literal(discount.percent, Numeric(10, PERCENT_SCALE)),
            literal(applied_at, DateTime()),
        ).where(product_exists, ~already_applied)

        return (
            insert(ProductDiscountRecord)
            .from_select(["product_id", "discount_id", "percent", "applied_at"], source)
            .returning(ProductDiscountRecord.seq)
        )

    @staticmethod
    def _to_entity(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            base_price=record.base_price,
            country_code=record.country,
            discounts=tuple(
                Discount(discount_id=d.discount_id, percent=d.percent)
                for d in record.discounts
            ),
        )
