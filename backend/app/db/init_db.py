"""
Database initialization
Creates tables on startup and optionally seeds a demo catalog.
"""
import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from backend.app.db.base import Base
from backend.app.models import ProductDiscountRecord, ProductRecord

logger = logging.getLogger(__name__)


DEMO_PRODUCTS = [
    {"id": "PROD001", "name": "Oak Dining Table", "base_price": Decimal("100.00"), "country": "Sweden"},
    {"id": "PROD002", "name": "Linen Armchair", "base_price": Decimal("250.00"), "country": "Sweden"},
    {"id": "PROD003", "name": "Ceramic Lamp", "base_price": Decimal("45.50"), "country": "French"},
    {"id": "PROD004", "name": "Walnut Bookshelf", "base_price": Decimal("320.00"), "country": "Italian"},
]

DEMO_DISCOUNTS = [
    {"product_id": "PROD002", "discount_id": "WELCOME10", "percent": Decimal("10")},
]


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create database tables
    Creates every table registered on Base.metadata if it does not exist.
    """
    logger.info("Creating database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables ready")


async def seed_demo_catalog(session: AsyncSession) -> int:
    """
    Insert demo products that are not present yet

    Args:
        session: Database session

    Returns:
        Number of products inserted
    """
    inserted = 0
    for product_data in DEMO_PRODUCTS:
        result = await session.execute(
            select(ProductRecord.id).where(ProductRecord.id == product_data["id"])
        )
        if result.scalar_one_or_none() is not None:
            logger.info(f"  ✓ product exists: {product_data['id']}")
            continue
        session.add(ProductRecord(**product_data))
        inserted += 1
        logger.info(f"  ➕ product added: {product_data['id']}")

    await session.flush()

    for discount_data in DEMO_DISCOUNTS:
        result = await session.execute(
            select(ProductDiscountRecord.seq).where(
                ProductDiscountRecord.product_id == discount_data["product_id"],
                ProductDiscountRecord.discount_id == discount_data["discount_id"],
            )
        )
        if result.scalar_one_or_none() is None:
            session.add(ProductDiscountRecord(applied_at=datetime.now(), **discount_data))

    await session.commit()
    return inserted


async def init_db(seed_demo: bool = False) -> None:
    """
    Database initialization entry point

    1. Create tables
    2. Seed demo catalog (optional)
    """
    from backend.app.db.session import AsyncSessionLocal, engine

    try:
        await create_tables(engine)

        if seed_demo:
            async with AsyncSessionLocal() as session:
                inserted = await seed_demo_catalog(session)
            logger.info(f"Demo catalog seeded ({inserted} new products)")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)
        raise
