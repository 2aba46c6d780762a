"""
Pytest fixtures and configuration for all tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from app.models.rivalry import RivalryUser
from app.models.user import User


MICHIGAN = "University of Michigan"
OHIO_STATE = "Ohio State University"
MICHIGAN_STATE = "Michigan State University"


@pytest.fixture
def mock_db():
    """
    Stand-in for the motor database.

    Services only use it to build their repositories; tests replace the
    repositories with AsyncMocks.
    """
    return MagicMock()


@pytest.fixture
def rivalry_users():
    """Three schools, the Michigan one with three teams and eight players."""
    raw = [
        # University of Michigan - Alpha
        {"_id": "user1", "name": "John Doe", "school": MICHIGAN, "team": "Alpha", "score": 5000},
        {"_id": "user2", "name": "Jane Smith", "school": MICHIGAN, "team": "Alpha", "score": 4500},
        {"_id": "user3", "name": "Bob Johnson", "school": MICHIGAN, "team": "Alpha", "score": 3200},

        # University of Michigan - Beta
        {"_id": "user4", "name": "Alice Brown", "school": MICHIGAN, "team": "Beta", "score": 4800},
        {"_id": "user5", "name": "Charlie Wilson", "school": MICHIGAN, "team": "Beta", "score": 4200},
        {"_id": "user6", "name": "David Lee", "school": MICHIGAN, "team": "Beta", "score": 2500},

        # University of Michigan - Gamma
        {"_id": "user7", "name": "Eve Davis", "school": MICHIGAN, "team": "Gamma", "score": 6000},
        {"_id": "user8", "name": "Frank Miller", "school": MICHIGAN, "team": "Gamma", "score": 3800},

        # Ohio State University
        {"_id": "user9", "name": "Grace Taylor", "school": OHIO_STATE, "team": "Alpha", "score": 5500},
        {"_id": "user10", "name": "Henry Anderson", "school": OHIO_STATE, "team": "Alpha", "score": 4000},
        {"_id": "user11", "name": "Ivy Thomas", "school": OHIO_STATE, "team": "Beta", "score": 7000},
        {"_id": "user12", "name": "Jack White", "school": OHIO_STATE, "team": "Beta", "score": 3500},

        # Michigan State University
        {"_id": "user13", "name": "Kelly Harris", "school": MICHIGAN_STATE, "team": "Gamma", "score": 4600},
        {"_id": "user14", "name": "Leo Martin", "school": MICHIGAN_STATE, "team": "Gamma", "score": 3900},
        {"_id": "user15", "name": "Mia Garcia", "school": MICHIGAN_STATE, "team": "Gamma", "score": 3200},
    ]
    return [RivalryUser(**doc) for doc in raw]


@pytest.fixture
def sample_user():
    """A referred, unverified user."""
    return User(
        _id="referred_1",
        email="player@example.com",
        name="Player One",
        share_code="PLAY01",
        referred_by_code="REFR01",
        email_verified=False,
    )


@pytest.fixture
def sample_referrer():
    return User(
        _id="referrer_1",
        email="referrer@example.com",
        share_code="REFR01",
        email_verified=True,
        bonus_attempts=0,
    )


@pytest.fixture
def mock_sender():
    sender = MagicMock()
    sender.send_verification_email = AsyncMock(return_value=True)
    return sender
