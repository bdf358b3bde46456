"""Async engine and session factory for the PostgreSQL record store.

Each WriteBatch commit opens its own ``session_factory.begin()`` block, so a
batch is exactly one transaction.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from crushboard.config import Settings

APPLICATION_NAME = "crushboard-api"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg-backed engine.

    Connections are tagged with the application name so they can be told
    apart in ``pg_stat_activity``.

    Args:
        settings: Application settings with database URL and pool sizing
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        pool_timeout=settings.database.pool_timeout,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Counters are re-read after commit, so loaded rows must stay usable.
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
