"""TalentFlow operations CLI.

Usage:
    talentflow init-db                                   # Create all tables
    talentflow create-admin ops@example.com -n "Ops" -p s3cret!   # Bootstrap an ADMIN
    talentflow serve --port 8000                         # Run the API with uvicorn
"""

from __future__ import annotations

import asyncio
import sys

import click

from talentflow import __version__
from talentflow.config import settings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler."""
    return asyncio.run(coro)


async def _init_db(database_url: str) -> None:
    from talentflow.db.engine import build_engine
    from talentflow.db.models import Base

    engine = build_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _create_admin(
    database_url: str, email: str, full_name: str, password: str
) -> int:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from talentflow.db.engine import build_engine
    from talentflow.enums import Role
    from talentflow.services.auth_service import AuthService

    engine = build_engine(database_url)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with factory() as session:
            user = await AuthService(session).create_account(
                email=email, full_name=full_name, password=password, role=Role.ADMIN
            )
            return user.id
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

_db_option = click.option(
    "--database-url",
    default=lambda: settings.database_url,
    show_default="TALENTFLOW_DATABASE_URL",
    help="Async SQLAlchemy URL.",
)


@click.group()
@click.version_option(version=__version__, prog_name="talentflow")
def cli():
    """TalentFlow — job board backend administration."""


@cli.command("init-db")
@_db_option
def init_db(database_url: str):
    """Create all tables from the ORM models."""
    _run(_init_db(database_url))
    click.echo("Database schema created.")


@cli.command("create-admin")
@click.argument("email")
@click.option("--full-name", "-n", required=True, help="Display name.")
@click.option(
    "--password", "-p", required=True, hide_input=True, help="Initial password."
)
@_db_option
def create_admin(email: str, full_name: str, password: str, database_url: str):
    """Create an ADMIN account directly in the database."""
    from talentflow.errors import DomainValidationError

    if len(password) < 6:
        click.echo("Error: password must be at least 6 characters", err=True)
        sys.exit(1)
    try:
        user_id = _run(_create_admin(database_url, email, full_name, password))
    except DomainValidationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    click.echo(f"Created ADMIN {email.strip().lower()} (id {user_id})")


@cli.command()
@click.option("--host", default=lambda: settings.host, show_default=True)
@click.option("--port", default=lambda: settings.port, type=int, show_default=True)
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: str, port: int, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run("talentflow.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
