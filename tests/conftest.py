"""Shared test fixtures for all tests."""
from __future__ import annotations

import pytest
from unittest.mock import AsyncMock

from backend.src.adapters.outbound.clock.system_clock import FixedClock
from backend.src.adapters.outbound.persistence.in_memory_user_repo import InMemoryUserRepository
from backend.src.application.leaderboard_service import LeaderboardService
from backend.src.application.scoring_service import ScoringService
from backend.src.application.user_service import UserService
from backend.src.application.user_writer import UserWriter
from backend.src.core.entities.user import User
from backend.src.core.services.potential_score import PotentialScoreCalculator
from backend.src.core.value_objects.preferences import Preferences

NOW_MS = 1_700_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


# ── Clock / Engine Fixtures ────────────────────────────────────────────────

@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW_MS)


@pytest.fixture
def calculator() -> PotentialScoreCalculator:
    return PotentialScoreCalculator()


# ── User Fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def sample_user() -> User:
    return User(
        id="user-123",
        name="Ada",
        email="ada@example.com",
        total_average_weight_ratings=4.0,
        number_of_rents=10,
        recently_active=NOW_MS - DAY_MS,
        created_at=NOW_MS - 10 * DAY_MS,
        updated_at=NOW_MS - DAY_MS,
        potential_score=0.5,
        preferences=Preferences(theme="dark", notifications=False),
    )


# ── Repository / Service Fixtures ──────────────────────────────────────────

@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def mock_user_repository():
    mock = AsyncMock()
    mock.get.return_value = None
    mock.list_by_score.return_value = []
    mock.delete.return_value = False
    return mock


@pytest.fixture
def user_writer(user_repository, calculator, clock) -> UserWriter:
    return UserWriter(
        repository=user_repository,
        calculator=calculator,
        clock=clock,
        initial_backoff=0,
    )


@pytest.fixture
def user_service(user_repository, user_writer) -> UserService:
    return UserService(repository=user_repository, writer=user_writer)


@pytest.fixture
def scoring_service(user_writer) -> ScoringService:
    return ScoringService(writer=user_writer)


@pytest.fixture
def leaderboard_service(user_repository) -> LeaderboardService:
    return LeaderboardService(repository=user_repository)
