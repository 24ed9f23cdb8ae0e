"""
Product API tests
"""
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from backend.app.api.deps import get_container
from backend.app.core.config import settings
from backend.app.main import app
from src.container import Container
from src.domain.entities.product import Product
from src.domain.services.vat_registry import VatRegistry
from src.infrastructure.adapters.persistence.memory_product_adapter import (
    InMemoryProductStoreAdapter,
)

API = settings.API_PREFIX


def _prices(body):
    return {item["id"]: item["finalPrice"] for item in body}


class TestGetProducts:
    """GET /products?country="""

    @pytest.mark.asyncio
    async def test_list_by_country(self, client: AsyncClient):
        """
        Given: two Swedish products and one French product
        When: Sweden is requested
        Then: both Swedish products with VAT applied, camelCase fields
        """
        response = await client.get(f"{API}/products", params={"country": "Sweden"})

        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body] == ["P1", "P2"]
        assert set(body[0]) == {"id", "name", "country", "basePrice", "vatRate", "discounts", "finalPrice"}
        assert _prices(body) == {"P1": pytest.approx(170), "P2": pytest.approx(425)}
        assert body[0]["vatRate"] == pytest.approx(0.70)

    @pytest.mark.asyncio
    async def test_prices_are_json_numbers(self, client: AsyncClient):
        """
        Given: P1 with a 10% discount
        When: Sweden is listed
        Then: every price field is a plain JSON number
        """
        await client.put(f"{API}/products/P1/discount", json={"discountId": "D1", "percent": 10})

        body = (await client.get(f"{API}/products", params={"country": "Sweden"})).json()

        p1 = body[0]
        for field in ("basePrice", "vatRate", "finalPrice"):
            assert isinstance(p1[field], (int, float)), field
        assert isinstance(p1["discounts"][0]["percent"], (int, float))
        assert p1["basePrice"] == 100
        assert p1["vatRate"] == pytest.approx(0.7)
        assert p1["finalPrice"] == pytest.approx(153)
        assert p1["discounts"][0]["percent"] == 10

    @pytest.mark.asyncio
    async def test_known_country_without_products(self, client: AsyncClient):
        response = await client.get(f"{API}/products", params={"country": "Italian"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{}, {"country": ""}, {"country": "Narnia"}])
    async def test_invalid_country(self, client: AsyncClient, params):
        response = await client.get(f"{API}/products", params=params)

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ERR_107"


class TestApplyDiscount:
    """PUT /products/{id}/discount"""

    @pytest.mark.asyncio
    async def test_apply(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/P1/discount", json={"discountId": "D1", "percent": 10}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == 200
        assert body["message"] == "Data updated Successfully"
        assert body["productId"] == "P1"
        assert body["discountId"] == "D1"
        assert body["outcome"] == "applied"

    @pytest.mark.asyncio
    async def test_scenario(self, client: AsyncClient):
        """
        Given: P1, base 100, Sweden
        When: D1 10%, D1 again, D2 90% are applied
        Then: 170 -> 153 -> 409 and 153 -> 0
        """
        async def p1_price():
            response = await client.get(f"{API}/products", params={"country": "Sweden"})
            return _prices(response.json())["P1"]

        assert await p1_price() == pytest.approx(170)

        first = await client.put(f"{API}/products/P1/discount", json={"discountId": "D1", "percent": 10})
        assert first.status_code == 200
        assert await p1_price() == pytest.approx(153)

        repeat = await client.put(f"{API}/products/P1/discount", json={"discountId": "D1", "percent": 10})
        assert repeat.status_code == 409
        assert repeat.json()["errorCode"] == "ERR_102"
        assert await p1_price() == pytest.approx(153)

        second = await client.put(f"{API}/products/P1/discount", json={"discountId": "D2", "percent": 90})
        assert second.status_code == 200
        assert await p1_price() == pytest.approx(0)

    @pytest.mark.asyncio
    async def test_discounts_listed_in_order(self, client: AsyncClient):
        for discount_id, percent in (("B", 5), ("A", 10)):
            await client.put(
                f"{API}/products/P3/discount", json={"discountId": discount_id, "percent": percent}
            )

        body = (await client.get(f"{API}/products", params={"country": "French"})).json()

        assert [d["discountId"] for d in body[0]["discounts"]] == ["B", "A"]
        # 40 * 0.85 * 1.65
        assert _prices(body)["P3"] == pytest.approx(56.1)

    @pytest.mark.asyncio
    async def test_unknown_product(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/NOPE/discount", json={"discountId": "D1", "percent": 10}
        )

        assert response.status_code == 404
        assert response.json() == {"errorCode": "ERR_101", "message": "Product not found: NOPE"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("percent", [0, -1, 100.5, 250])
    async def test_percent_out_of_range(self, client: AsyncClient, percent):
        response = await client.put(
            f"{API}/products/P1/discount", json={"discountId": "D1", "percent": percent}
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ERR_105"

    @pytest.mark.asyncio
    async def test_blank_product_id(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/%20/discount", json={"discountId": "D1", "percent": 10}
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ERR_106"

    @pytest.mark.asyncio
    async def test_blank_discount_id(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/P1/discount", json={"discountId": " ", "percent": 10}
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ERR_105"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"discountId": "D1"},
        {"percent": 10},
        {"discountId": "D1", "percent": "ten"},
    ])
    async def test_malformed_body(self, client: AsyncClient, payload):
        response = await client.put(f"{API}/products/P1/discount", json=payload)

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ERR_108"

    @pytest.mark.asyncio
    async def test_snake_case_body_accepted(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/P1/discount", json={"discount_id": "D1", "percent": "12.5"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("percent", ["33.33333", "0.00001"])
    async def test_percent_beyond_stored_precision(self, client: AsyncClient, percent):
        """
        Given: a percent with more decimals than the store keeps
        When: it is applied
        Then: 400 ERR_105 and the product keeps no discount
        """
        response = await client.put(
            f"{API}/products/P1/discount", json={"discountId": "D1", "percent": percent}
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ERR_105"
        body = (await client.get(f"{API}/products", params={"country": "Sweden"})).json()
        assert body[0]["discounts"] == []

    @pytest.mark.asyncio
    async def test_percent_at_stored_precision_round_trips(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/P1/discount", json={"discountId": "D1", "percent": "33.3333"}
        )
        assert response.status_code == 200

        body = (await client.get(f"{API}/products", params={"country": "Sweden"})).json()

        assert body[0]["discounts"] == [{"discountId": "D1", "percent": 33.3333}]
        # 100 * (1 - 0.333333) * 1.7
        assert body[0]["finalPrice"] == pytest.approx(113.33339)

    @pytest.mark.asyncio
    async def test_discount_id_too_long(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/P1/discount", json={"discountId": "D" * 65, "percent": 10}
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ERR_105"

    @pytest.mark.asyncio
    async def test_product_id_too_long(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/{'P' * 65}/discount", json={"discountId": "D1", "percent": 10}
        )

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ERR_106"

    @pytest.mark.asyncio
    async def test_discount_id_at_length_limit(self, client: AsyncClient):
        response = await client.put(
            f"{API}/products/P1/discount", json={"discountId": "D" * 64, "percent": 10}
        )
        assert response.status_code == 200


class TestStoreFailure:
    """Storage faults return 500 without driver details"""

    @pytest.fixture
    async def failing_client(self):
        store = InMemoryProductStoreAdapter()
        store.add_product(Product(id="P1", name="Lamp", base_price=Decimal("10"), country_code="Sweden"))
        store.set_healthy(False)
        app.dependency_overrides[get_container] = lambda: Container(
            product_store_port=store, vat_registry=VatRegistry.default()
        )

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac

        app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_apply_discount(self, failing_client: AsyncClient):
        response = await failing_client.put(
            f"{API}/products/P1/discount", json={"discountId": "D1", "percent": 10}
        )

        assert response.status_code == 500
        assert response.json() == {"errorCode": "ERR_103", "message": "Database operation failed"}

    @pytest.mark.asyncio
    async def test_list_products(self, failing_client: AsyncClient):
        response = await failing_client.get(f"{API}/products", params={"country": "Sweden"})

        assert response.status_code == 500
        assert response.json()["errorCode"] == "ERR_103"


class TestServiceEndpoints:
    """Root, health and metrics"""

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == f"{API}/docs"

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_metrics_count_outcomes(self, client: AsyncClient):
        await client.put(f"{API}/products/P1/discount", json={"discountId": "M1", "percent": 10})

        response = await client.get("/metrics/")

        assert response.status_code == 200
        assert 'discount_applications_total{outcome="applied"}' in response.text
