"""FastAPI dependency injection for database sessions, the voting system, and admin credentials."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from election_api.core.database import get_session_factory
from election_api.lib.voting import VotingSystem

admin_bearer = HTTPBearer(auto_error=False, description="Admin token from POST /auth/login")


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def get_voting_system(request: Request) -> VotingSystem:
    """Return the voting system built during application startup.

    Raises:
        RuntimeError: If the application lifespan has not created it.
    """
    system = getattr(request.app.state, "voting_system", None)
    if system is None:
        msg = "Voting system not initialized."
        raise RuntimeError(msg)
    return system


async def get_admin_credential(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(admin_bearer)],
) -> str | None:
    """Extract the bearer token, if any.

    Validation is left to the voting system so an unauthorized admin call is
    rejected before any other check, with the same error as a bad token.
    """
    if credentials is None:
        return None
    return credentials.credentials
