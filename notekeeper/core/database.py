"""
Database Configuration.

SQLAlchemy async engine and session management for the local SQLite file.
Engines are created per NoteStore instance; there is no module-level state.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notekeeper.core.logging import get_logger

logger = get_logger(__name__)

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


def build_database_url(path: str | Path) -> str:
    """
    Build an aiosqlite URL for a database file.

    ":memory:" maps to an in-memory database.
    """
    if str(path) == ":memory:":
        return MEMORY_URL
    return f"sqlite+aiosqlite:///{Path(path)}"


def create_engine(url: str, echo: bool = False, timeout: float = 5.0) -> AsyncEngine:
    """
    Create an async engine holding a single SQLite connection.

    StaticPool keeps exactly one connection, so every statement issued by
    a store goes through the same handle.
    """
    engine = create_async_engine(
        url,
        echo=echo,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False, "timeout": timeout},
    )
    logger.debug("Database engine created", extra={"url": url})
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a session that commits on success and rolls back on error.

    Usage:
        async with session_scope(factory) as session:
            repo = NoteRepository(session)
            ...
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
