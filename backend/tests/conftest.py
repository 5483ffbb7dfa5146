"""
Blade Stock Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the whole suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:   AsyncMock standing in for AsyncSession
    ├── db_engine:         fresh SQLite file database with every table created
    ├── session_factory:   async_sessionmaker bound to db_engine
    ├── db_session:        one session from session_factory
    ├── test_app:          the app with its session factory dependency
    │                      pointed at db_engine
    └── test_client:       HTTPX AsyncClient talking to test_app
"""

import os

# Must run before any bladestock import: settings are read at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STOCK_PASSWORD"] = "2255"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

import bladestock.models  # noqa: E402,F401
from bladestock.database import Base, get_session_factory  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    A mock async database session; no real database involved.

    Usage:
        async def test_x(mock_db_session):
            mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalars = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.bind = None
    return session


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    A throwaway SQLite database with the full schema.

    A file (not :memory:) so that the concurrent sessions of the aggregate
    read all see the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bladestock_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_app(session_factory):
    """
    The application with storage redirected to the per-test SQLite database.

    Tests that need their own transport (another client address, app errors
    returned as responses) build an AsyncClient over this app.
    """
    from bladestock.main import app

    async def _session_factory_override():
        return session_factory

    app.dependency_overrides[get_session_factory] = _session_factory_override
    yield app
    app.dependency_overrides.pop(get_session_factory, None)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
