"""Async database engine and session management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from notify_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

db_settings = get_db_settings()
app_settings = get_app_settings()

# Engine creation does not connect; the first session checkout does.
_engine_kwargs = db_settings.engine_kwargs()
_engine_kwargs["echo"] = bool(_engine_kwargs.get("echo")) or app_settings.debug

engine: AsyncEngine = create_async_engine(db_settings.get_sqlalchemy_url(), **_engine_kwargs)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(Profile))
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def import_models() -> None:
    """Import every model module so Base.metadata knows all tables."""
    import notify_service.features.accounts.models  # noqa: F401
    import notify_service.features.notifications.models  # noqa: F401


async def create_tables(bind: AsyncEngine | None = None) -> list[str]:
    """Create all known tables that do not exist yet.

    Returns:
        Names of the tables in the metadata.
    """
    from notify_service.core.database import Base

    import_models()
    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    tables = sorted(Base.metadata.tables)
    logger.info("Database tables ensured", extra={"tables": tables})
    return tables


async def init_database() -> None:
    """Verify database connectivity.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database cannot be reached.
    """
    db_url = db_settings.get_sqlalchemy_url()
    safe_url = engine.url.render_as_string(hide_password=True)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"url": safe_url, "error": str(e)},
        )
        raise

    if db_url.startswith("sqlite"):
        # Local/dev fallback has no migrations; make the schema usable.
        await create_tables()
    logger.info("Database connection established", extra={"url": safe_url})


async def close_database() -> None:
    """Dispose the engine; called during application shutdown."""
    logger.info("Closing database connection")
    try:
        await engine.dispose()
    except Exception as e:
        logger.exception("Error closing database connection", extra={"error": str(e)})
