"""
Notekeeper Backend — Database Engine & Session Management
===========================================================

What:  Async SQLAlchemy engine, session factory, declarative base, and a
       transactional session scope used by the SQL repository.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling; `session_scope()`
       commits on success and rolls back on error.
Who:   Used by SqlAlchemyNoteRepository, Alembic, and the app lifespan.

Session-per-operation:
    Every repository call opens its own session instead of sharing one per
    request. The note listing issues its owner lookups concurrently, and an
    AsyncSession cannot run two statements at the same time.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _engine_options() -> Dict[str, Any]:
    """Pool options for the configured URL (SQLite pools reject sizing args)."""
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: records returned by the repository stay readable
# after their session has been committed and closed
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations
    and `create_tables()` uses for local development.
    """
    pass


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a session that commits on success and rolls back on error.

    Example:
        async with session_scope(async_session_factory) as session:
            session.add(note)

    Raises:
        Any exception from the block is re-raised after rollback, so the
        caller (or the global error handler) decides how to report it.
    """
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create all tables known to Base.metadata (development/tests only)."""
    # Models must be imported so they register with Base.metadata
    from app.models import note, user  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
