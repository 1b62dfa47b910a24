"""Admin credential CLI command."""

import typer


def admin_token(
    expires_minutes: int | None = typer.Option(
        None,
        "--expires-minutes",
        help="Token lifetime in minutes (default: ADMIN_TOKEN_EXPIRE_MINUTES)",
    ),
) -> None:
    """Print a signed admin token for use as an Authorization bearer credential."""
    from election_api.core.config import get_settings
    from election_api.core.security import create_admin_token

    settings = get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.admin_token_expire_minutes
    if minutes <= 0:
        typer.echo("Error: --expires-minutes must be positive", err=True)
        raise typer.Exit(code=1)
    typer.echo(create_admin_token(settings.jwt_secret_key, settings.jwt_algorithm, expires_minutes=minutes))
