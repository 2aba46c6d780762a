"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient
from unittest.mock import AsyncMock, patch

from app.main import app
from app.database import get_database
from app.repositories.user_repository import UserRepository


@pytest.fixture
async def client(mock_db):
    """
    HTTP client for testing API endpoints.

    Overrides the database dependency with a mock; tests patch the
    repositories they need.
    """
    async def override_get_db():
        return mock_db

    app.dependency_overrides[get_database] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def snapshot(rivalry_users):
    """Serve the rivalry fixture as the users collection snapshot."""
    with patch.object(
        UserRepository,
        "get_rivalry_snapshot",
        new=AsyncMock(return_value=rivalry_users)
    ) as mocked:
        yield mocked
