"""
Pytest settings and shared fixtures for the API
The SQL product store runs on a temporary SQLite file per test.
"""
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from backend.app.api.deps import get_container
from backend.app.db.init_db import create_tables
from backend.app.main import app
from backend.app.models import ProductRecord
from src.container import Container
from src.domain.services.vat_registry import VatRegistry


@pytest.fixture
async def async_engine(tmp_path):
    """
    Test async engine
    File-backed SQLite so every session sees the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", echo=False)
    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def seeded_catalog(session_factory):
    """P1 (Sweden, 100), P2 (Sweden, 250), P3 (French, 40)"""
    async with session_factory() as session:
        session.add_all([
            ProductRecord(id="P1", name="Oak Dining Table", base_price=Decimal("100"), country="Sweden"),
            ProductRecord(id="P2", name="Linen Armchair", base_price=Decimal("250"), country="Sweden"),
            ProductRecord(id="P3", name="Ceramic Lamp", base_price=Decimal("40"), country="French"),
        ])
        await session.commit()


@pytest.fixture
def container(session_factory, seeded_catalog):
    return Container.create_from_session_factory(session_factory, vat_registry=VatRegistry.default())


@pytest.fixture
async def client(container) -> AsyncGenerator[AsyncClient, None]:
    """
    Test HTTP client
    Sends requests to the FastAPI app with the container overridden.
    """
    app.dependency_overrides[get_container] = lambda: container

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
