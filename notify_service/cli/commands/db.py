"""Database management commands.

Example:bash
    # Create missing tables directly from the models
    notify-service db init

    # Apply all pending migrations
    notify-service db upgrade
"""

import sys
from pathlib import Path

import click
from sqlalchemy.exc import SQLAlchemyError

from notify_service.cli.utils import coro, error, info, success


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify connectivity and create any missing tables."""
    from notify_service.infra.database import close_database, create_tables, engine

    info(f"Connecting to: {engine.url.render_as_string(hide_password=True)}")
    try:
        tables = await create_tables()
    except SQLAlchemyError as e:
        error(f"Failed to initialize database: {e}")
        sys.exit(1)
    finally:
        await close_database()
    success(f"Database ready ({len(tables)} tables)")


@db.command()
@click.option("--revision", default="head", show_default=True, help="Target revision")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("alembic.ini"),
    show_default=True,
    help="Path to alembic.ini",
)
def upgrade(revision: str, config_path: Path) -> None:
    """Apply migrations up to REVISION."""
    from alembic import command
    from alembic.config import Config

    if not config_path.exists():
        error(f"Alembic config not found: {config_path}")
        sys.exit(1)

    command.upgrade(Config(str(config_path)), revision)
    success(f"Database upgraded to {revision}")
