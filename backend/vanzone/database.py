"""Database engine, sessions and migrations."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from vanzone.config import Settings, get_settings

logger = logging.getLogger(__name__)

ALEMBIC_INI = Path(__file__).parent.parent / "alembic.ini"


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


def engine_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for create_async_engine derived from settings.

    Discovery reads are short scans over one latitude band, so a small pool
    and a statement timeout keep a slow query from holding connections.
    """
    server_settings = {"application_name": "vanzone"}
    if settings.db_statement_timeout_ms:
        server_settings["statement_timeout"] = str(settings.db_statement_timeout_ms)

    options: dict[str, Any] = {
        "echo": settings.debug,
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "connect_args": {"server_settings": server_settings},
    }
    if settings.db_pool_recycle_seconds:
        options["pool_recycle"] = settings.db_pool_recycle_seconds
    return options


settings = get_settings()

engine = create_async_engine(settings.database_url, **engine_options(settings))

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session.

    The profile store commits its own writes; whatever is still open when the
    request fails is rolled back.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def alembic_config() -> Config:
    """Alembic config for in-process upgrades, leaving app logging alone."""
    if not ALEMBIC_INI.exists():
        raise FileNotFoundError(f"Alembic config not found: {ALEMBIC_INI}")
    config = Config(str(ALEMBIC_INI))
    config.attributes["configure_logger"] = False
    return config


async def init_db() -> None:
    """Bring the schema to the latest migration."""
    config = alembic_config()
    logger.info("Upgrading database schema to head")
    try:
        # env.py drives its own event loop, so it runs in a worker thread
        await asyncio.to_thread(command.upgrade, config, "head")
    except Exception:
        logger.exception("Database migration failed")
        raise
    logger.info("Database schema is up to date")


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()
