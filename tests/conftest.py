"""
Chambre API: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (service unit tests, no DB)
    ├── sample_room_payload: A complete, valid room body
    ├── test_app: App wired to a temporary SQLite database
    └── test_client: HTTPX AsyncClient talking to test_app
"""

import os
import uuid
from unittest.mock import AsyncMock, MagicMock

# Set before any chambre import so the module-level app never targets PostgreSQL
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from chambre.config import Settings
from chambre.main import create_app
from chambre.models.room import Room, utc_now


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_room(mock_db_session):
            mock_db_session.get.return_value = room
            result = await room_service.get_room(mock_db_session, str(room.id))
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
def sample_room_payload():
    return {
        "roomNumber": "101",
        "type": "double",
        "price": 120.5,
        "isAvailable": True,
        "amenities": ["wifi", "tv", "minibar"],
        "capacity": 2,
        "floor": 1,
        "description": "Sea view",
    }


@pytest.fixture
def stored_room():
    """A Room as the store would return it."""
    now = utc_now()
    return Room(
        id=uuid.uuid4(),
        room_number="204",
        type="suite",
        price=340.0,
        is_available=True,
        amenities=["wifi", "jacuzzi"],
        capacity=4,
        floor=2,
        description=None,
        created_at=now,
        updated_at=now,
    )


@pytest_asyncio.fixture
async def test_app(tmp_path):
    """
    A fresh application backed by its own SQLite file.

    ASGITransport does not run the lifespan, so tables are created here.
    """
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'chambre.db'}",
        log_level="WARNING",
    )
    app = create_app(settings)
    await app.state.database.create_all()
    yield app
    await app.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Usage:
        async def test_list(test_client):
            response = await test_client.get("/rooms")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
