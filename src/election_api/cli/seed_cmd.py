"""CLI command that creates the sample election in the configured database.

``election-api seed`` loads the stored state, adds the sample election and
its two candidates when they are missing, and writes them through.
"""

import asyncio

import typer


def seed() -> None:
    """Create the sample election and candidates if they do not exist."""
    asyncio.run(_run_seed())


async def _run_seed() -> None:
    from election_api.core.config import get_settings
    from election_api.core.database import create_tables, dispose_engine, get_session_factory, init_engine
    from election_api.core.security import create_admin_token
    from election_api.services import persistence_service
    from election_api.services.seed_service import ensure_sample_data
    from election_api.services.voting_service import build_voting_system

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        if settings.database_url.startswith("sqlite"):
            await create_tables()
        system = build_voting_system(settings)
        token = create_admin_token(settings.jwt_secret_key, settings.jwt_algorithm, expires_minutes=1)
        async with get_session_factory()() as session:
            await persistence_service.load_state(session, system)
            result = await ensure_sample_data(session, system, token)
    finally:
        await dispose_engine()

    if result.election_created:
        typer.echo("Created sample election")
    typer.echo(
        f"Candidates created: {len(result.candidates_created)}, assigned: {len(result.assignments_created)}"
    )
