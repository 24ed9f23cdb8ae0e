"""
Product catalog models
One row per product, discounts in a child table in application order.
"""
from datetime import datetime
from decimal import Decimal
from typing import List

from sqlalchemy import DateTime, ForeignKey, Index, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base
from src.domain.entities.product import MAX_ID_LENGTH, PERCENT_SCALE


class ProductRecord(Base):
    """Product table"""
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH), primary_key=True,
        comment="Externally assigned product ID"
    )
    name: Mapped[str] = mapped_column(
        String(255), nullable=False,
        comment="Product name"
    )
    base_price: Mapped[Decimal] = mapped_column(
        Numeric(18, 4), nullable=False,
        comment="Price before discounts and VAT"
    )
    country: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
        comment="Country code (VAT registry key)"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False,
        comment="Ingestion time"
    )

    discounts: Mapped[List["ProductDiscountRecord"]] = relationship(
        back_populates="product",
        order_by="ProductDiscountRecord.seq",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<ProductRecord {self.id} ({self.country}) {self.base_price}>"


class ProductDiscountRecord(Base):
    """Applied discount table"""
    __tablename__ = "product_discounts"

    seq: Mapped[int] = mapped_column(
        primary_key=True,
        comment="Insertion sequence, defines application order"
    )
    product_id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH), ForeignKey("products.id", ondelete="CASCADE"), nullable=False,
        comment="Owning product"
    )
    discount_id: Mapped[str] = mapped_column(
        String(MAX_ID_LENGTH), nullable=False,
        comment="Discount ID, unique per product"
    )
    percent: Mapped[Decimal] = mapped_column(
        Numeric(10, PERCENT_SCALE), nullable=False,
        comment="Discount percentage points (0, 100]"
    )
    applied_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False,
        comment="Time the discount was applied"
    )

    product: Mapped[ProductRecord] = relationship(back_populates="discounts")

    # At most one discount per (product, discount id), backing the write filter
    __table_args__ = (
        UniqueConstraint(
            "product_id", "discount_id",
            name="uq_product_discounts_product_id_discount_id",
        ),
        Index("ix_product_discounts_product_id_seq", "product_id", "seq"),
    )

    def __repr__(self) -> str:
        return f"<ProductDiscountRecord {self.product_id}/{self.discount_id} {self.percent}%>"
