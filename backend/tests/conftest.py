"""
Product Catalog Backend: Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the whole suite.

Fixtures:
    mock_db_session:  AsyncMock standing in for AsyncSession (service unit tests)
    sample_products:  Rows seeded into every SQLite-backed test database
    database:         Database bound to a temporary SQLite file, schema created
                      and seeded
    test_client:      HTTPX AsyncClient talking to an app built on `database`
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Set before any catalog import so the module-level app never targets PostgreSQL
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="catalog_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert

from catalog.config import Settings
from catalog.database import Base, Database
from catalog.models.product import Product


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = product
        result = await product_service.get_product(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_products():
    return [
        {"id": 1, "name": "Widget", "category": "Tools", "price": 9.99},
        {"id": 2, "name": "Gadget", "category": "Tools", "price": 15.5},
        {"id": 3, "name": "Super Widget", "category": "Tools", "price": 20.0},
        {"id": 4, "name": "Teapot", "category": "Kitchen", "price": 12.25},
        {"id": 5, "name": "Widget Stand", "category": "Furniture", "price": 45.0},
    ]


# ══════════════════════════════════════════════════════════════════════════
# Database-backed fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(tmp_path, sample_products):
    """
    A Database on a fresh SQLite file with the products table seeded.

    Rows are inserted directly; the service itself never creates products.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(insert(Product), sample_products)
    yield db
    await db.dispose()


@pytest.fixture
def app(database):
    """Application serving from `database`."""
    from catalog.main import create_app

    return create_app(settings=Settings(), database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient wired to `app`.

    Usage:
        response = await test_client.get("/product", params={"id": 1})
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
