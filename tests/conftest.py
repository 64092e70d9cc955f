"""
Endpoint Registry — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.

Fixtures:
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── sample_endpoint_data: Field values for an ApiEndpoint row
    ├── database: Real Database on a temporary SQLite file, tables created
    └── test_client: HTTPX AsyncClient wired to a fresh app using `database`
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings BEFORE any application imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="endpoint_registry_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PREFIX"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from endpoint_registry.database import Database


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.get.return_value = endpoint
            result = await endpoint_service.get_endpoint(mock_db_session, str(endpoint.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_endpoint_data():
    """Field values for one ApiEndpoint row."""
    now = datetime.now(timezone.utc)
    return {
        "id": uuid4(),
        "name": "ping",
        "path": "/ping",
        "method": "GET",
        "description": "Liveness check",
        "created_at": now,
        "updated_at": now,
    }


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database on a throwaway SQLite file with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(database):
    """
    A fresh application bound to the test database.

    ASGITransport does not run the lifespan, so the Database is attached to
    app.state here, exactly where the lifespan would put it.
    """
    from endpoint_registry.main import create_app

    application = create_app()
    application.state.database = database
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/endpoints")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
