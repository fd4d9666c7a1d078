"""Engine, session factory and schema helpers."""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Import models to register with AuthBase.metadata
import verse_auth.persistence.sqlalchemy.models  # noqa: F401
from verse_auth.persistence.sqlalchemy.base import AuthBase
from verse_config import Settings

logger = logging.getLogger(__name__)

def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
    )

def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all verse_auth tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring account tables exist...")
    async with engine.begin() as conn:
        await conn.run_sync(AuthBase.metadata.create_all)
    logger.info("Account schema is up to date")
