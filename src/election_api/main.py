"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from election_api.core.config import get_settings
from election_api.core.database import create_tables, dispose_engine, get_session_factory, init_engine
from election_api.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle.

    On startup: init the engine, rebuild the voting system from the database
    and optionally seed the sample election. On shutdown: dispose the engine.
    """
    from election_api.core.security import create_admin_token
    from election_api.services import persistence_service
    from election_api.services.seed_service import ensure_sample_data
    from election_api.services.voting_service import build_voting_system

    settings = get_settings()
    setup_logging(
        settings.log_level,
        log_dir=settings.log_dir,
        json_logs=settings.log_json,
        environment=settings.environment,
    )
    init_engine(settings.database_url, schema=settings.database_schema)
    if settings.database_url.startswith("sqlite"):
        await create_tables()

    system = build_voting_system(settings)
    async with get_session_factory()() as session:
        await persistence_service.load_state(session, system)
        if settings.seed_sample_data:
            token = create_admin_token(settings.jwt_secret_key, settings.jwt_algorithm, expires_minutes=1)
            await ensure_sample_data(session, system, token)

    app.state.voting_system = system
    logger.info("Election API started ({})", settings.environment)

    yield

    await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Election API",
        description="Voter registration, candidate management and secure ballot casting",
        version="0.1.0",
        lifespan=lifespan,
    )

    from election_api.api.errors import register_exception_handlers
    from election_api.api.router import create_router, setup_middleware

    register_exception_handlers(app)
    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
