"""Shared test fixtures for async database, sessions, clocks, and admin tokens."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from election_api.core.config import Settings
from election_api.core.security import create_admin_token
from election_api.lib.voting import VotingSystem, counter_ids
from election_api.models.base import Base
from election_api.services.voting_service import build_voting_system

TEST_SECRET = "test-secret-key-not-for-production-use"
TEST_ADMIN_PASSWORD = "correct-horse-battery"
NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=UTC)


class FixedClock:
    """A settable clock for deterministic windows and ages."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        admin_password=TEST_ADMIN_PASSWORD,
        jwt_secret_key=TEST_SECRET,
        jwt_algorithm="HS256",
        admin_token_expire_minutes=30,
        _env_file=None,
    )  # type: ignore[call-arg]


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def admin_token(settings: Settings) -> str:
    """Generate a JWT carrying the admin role."""
    return create_admin_token(settings.jwt_secret_key, settings.jwt_algorithm, expires_minutes=30)


@pytest.fixture
def voting_system(settings: Settings, clock: FixedClock) -> VotingSystem:
    """An empty voting system with deterministic IDs and a fixed clock."""
    return build_voting_system(settings, clock=clock, id_generator=counter_ids("id"))


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    async with session_factory() as session:
        yield session
