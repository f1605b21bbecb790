"""Async PostgreSQL engine and sessions (SQLAlchemy + asyncpg)."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from participa.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the process-wide engine; SQL is echoed when ``debug`` is on."""
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for one session per HTTP request.

    Repositories flush explicitly so unique violations surface inside the
    caller's atomic block; the request commits once at the end.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
