"""Typer CLI root application with serve command."""

import typer

from election_api.core.config import get_settings
from election_api.core.logging import setup_logging

app = typer.Typer(name="election-api", help="Election management CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(
        settings.log_level,
        log_dir=settings.log_dir,
        json_logs=settings.log_json,
        environment=settings.environment,
    )


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "election_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from election_api.cli.admin_cmd import admin_token
    from election_api.cli.db_cmd import db_app
    from election_api.cli.seed_cmd import seed

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.command("seed")(seed)
    app.command("admin-token")(admin_token)


_register_subcommands()
