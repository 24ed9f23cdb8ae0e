"""
Product schemas
Pydantic models for API requests and responses. Fields are camelCase on the wire.
"""
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from src.application.dto.catalog import ApplyDiscountOutcome
from src.domain.entities.product import Discount
from src.domain.value_objects.price_quote import PriceQuote

# Exact internally, a JSON number on the wire
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DiscountResponse(CamelModel):
    """Applied discount"""
    discount_id: str = Field(..., description="Discount ID")
    percent: JsonDecimal = Field(..., description="Discount percentage points")

    @classmethod
    def from_entity(cls, discount: Discount) -> "DiscountResponse":
        return cls(discount_id=discount.discount_id, percent=discount.percent)


class ProductQuoteResponse(CamelModel):
    """Product with computed final price"""
    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    country: str = Field(..., description="Country code")
    base_price: JsonDecimal = Field(..., description="Price before discounts and VAT")
    vat_rate: JsonDecimal = Field(..., description="VAT as a fraction (0.70 = 70%)")
    discounts: List[DiscountResponse] = Field(default_factory=list, description="Applied discounts, in order")
    final_price: JsonDecimal = Field(..., description="base * (1 - sum(percent)/100) * (1 + VAT)")

    @classmethod
    def from_quote(cls, quote: PriceQuote) -> "ProductQuoteResponse":
        return cls(
            id=quote.product_id,
            name=quote.name,
            country=quote.country_code,
            base_price=quote.base_price,
            vat_rate=quote.vat_rate,
            discounts=[DiscountResponse.from_entity(d) for d in quote.discounts],
            final_price=quote.final_price,
        )


class ApplyDiscountRequest(CamelModel):
    """Apply discount request. Range is checked by the use case so violations return 400."""
    discount_id: str = Field(..., description="Discount ID, unique per product")
    percent: Decimal = Field(..., description="Discount percentage points, 0 < percent <= 100")


class ApplyDiscountResponse(CamelModel):
    """Apply discount response"""
    status: int = Field(200, description="HTTP status")
    message: str = Field("Data updated Successfully")
    product_id: str
    discount_id: str
    outcome: str = Field(..., description="applied")

    @classmethod
    def from_outcome(cls, outcome: ApplyDiscountOutcome) -> "ApplyDiscountResponse":
        return cls(
            product_id=outcome.product_id,
            discount_id=outcome.discount_id,
            outcome=outcome.status.value,
        )


class ErrorResponse(CamelModel):
    """Error body"""
    error_code: str = Field(..., description="ERR_1xx code")
    message: str
