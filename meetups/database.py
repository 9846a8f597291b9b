"""
Meetups Backend: Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, declarative base and
       transaction helpers.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling and provides session
       helpers that commit on success and roll back on error.
Who:   Used by whoever hosts the services (HTTP layer, scripts, tests).
When:  Engine is created at module import; sessions are created per call.

Transaction model:
    Services only ever `flush()`; they never commit. The caller owns the
    transaction through `session_scope()` (or `get_db_session()` for
    frameworks that inject generator dependencies), so one service call is
    one logical transaction.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import MetaData, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from meetups.config import settings


def _engine_options() -> Dict[str, Any]:
    """Keyword arguments for `create_async_engine` based on the configured URL."""
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode only
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        # SQLite picks its own pool class (StaticPool for :memory:),
        # which rejects queue-pool sizing arguments.
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores `ON DELETE CASCADE` unless the pragma is set per
    connection; PostgreSQL needs nothing.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())
if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: response schemas are built from ORM objects after
# the commit, so attributes must stay loaded.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
# Deterministic constraint names keep Alembic revisions portable between
# PostgreSQL and SQLite.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all ORM models; shares one metadata object with Alembic."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ── Session Helpers ───────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for one unit of work.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller (the caller runs service methods)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises unchanged
        5. Always: closes the session (returns connection to pool)

    Shaped as an async generator so it can be used directly as a
    dependency by an injecting framework.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Context-manager form of `get_db_session()`.

    Example:
        async with session_scope() as db:
            await meetup_service.attend_meetup(db, meetup_id, user)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_all() -> None:
    """Create every table known to `Base.metadata` (development and tests)."""
    # Imported for its side effect: registers all models with Base.metadata
    import meetups.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all() -> None:
    """Drop every table known to `Base.metadata`."""
    import meetups.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    """Gracefully close all pooled connections at process shutdown."""
    await engine.dispose()
