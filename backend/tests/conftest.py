"""
BizTime Backend - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the whole suite.
How:   Points the app at a throwaway SQLite file (aiosqlite driver) BEFORE any
       `biztime` module is imported, since the engine is built at import time.

Fixture Hierarchy:
    mock_db_session   AsyncMock session for service unit tests (no database)
    make_result       factory for the mock Result objects execute() returns
    db_schema         creates the tables before a test, drops them after
    seeded            db_schema + company "test" with one 100.00 invoice
    test_client       httpx AsyncClient talking to the app over ASGITransport
"""

import os
import tempfile

_TEST_DB_DIR = tempfile.mkdtemp(prefix="biztime_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ.pop("DB_ISOLATION_LEVEL", None)

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import insert  # noqa: E402

TEST_COMPANY = {"code": "test", "name": "Test", "description": "Used for testing"}


@pytest.fixture
def mock_db_session():
    """
    Mock async database session.

    Usage:
        result = MagicMock()
        result.mappings.return_value.first.return_value = {"code": "acme", ...}
        mock_db_session.execute.return_value = result
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def make_result():
    """
    Factory for mock Result objects.

    make_result(first=row) / make_result(all_rows=[...]) / make_result(one=row)
    / make_result(scalars=[...]) / make_result(row=tuple_or_None)
    """
    def _make(first=None, all_rows=None, one=None, scalars=None, row=None):
        result = MagicMock()
        result.mappings.return_value.first.return_value = first
        result.mappings.return_value.all.return_value = all_rows or []
        result.mappings.return_value.one.return_value = one
        result.scalars.return_value.all.return_value = scalars or []
        result.first.return_value = row
        return result
    return _make


@pytest_asyncio.fixture
async def db_schema():
    """Fresh tables for one test; dropped and the engine disposed afterwards."""
    from biztime.database import Base, create_tables, engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await create_tables()

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(db_schema):
    """
    Inserts company "test" and one invoice of 100 for it.

    Returns:
        {"invoice_id": <generated id>}
    """
    from biztime.database import async_session_factory
    from biztime.models.company import Company
    from biztime.models.invoice import Invoice

    async with async_session_factory() as session:
        await session.execute(insert(Company).values(**TEST_COMPANY))
        result = await session.execute(
            insert(Invoice)
            .values(comp_code=TEST_COMPANY["code"], amt=100)
            .returning(Invoice.id)
        )
        invoice_id = result.scalar_one()
        await session.commit()

    return {"invoice_id": invoice_id}


@pytest_asyncio.fixture
async def test_client(db_schema):
    """
    Async HTTP client for endpoint tests.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from biztime.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
