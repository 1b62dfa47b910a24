"""Fixtures for API tests: an app wired to an in-memory database and a fixed-clock voting system."""

from collections.abc import AsyncGenerator
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from election_api.core.config import Settings, get_settings
from election_api.core.dependencies import get_async_session
from election_api.lib.voting import VotingSystem
from election_api.main import create_app


@pytest.fixture
def app(
    settings: Settings,
    voting_system: VotingSystem,
    session_factory: async_sessionmaker[AsyncSession],
) -> FastAPI:
    settings.write_rate_limit_per_minute = 1000
    settings.rate_limit_per_minute = 1000
    with patch("election_api.main.get_settings", return_value=settings):
        application = create_app()

    async def _session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_async_session] = _session
    application.dependency_overrides[get_settings] = lambda: settings
    application.state.voting_system = voting_system
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test/api/v1") as ac:
        yield ac


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}
