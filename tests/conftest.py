"""
Meetups Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for pure unit tests (no DB)
    ├── db_engine:       fresh in-memory SQLite engine with the schema created
    ├── session_factory: async_sessionmaker bound to db_engine
    ├── db_session:      real AsyncSession bound to db_engine
    ├── make_user:       factory persisting a User
    ├── make_image:      factory persisting an Image owned by a user
    └── meetup_data:     a valid MeetupCreate with a two-item agenda
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any meetups import builds the engine
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import meetups.models  # noqa: F401  (registers tables)
from meetups.database import Base, enable_sqlite_foreign_keys
from meetups.models.agenda_item import AgendaItemType, Language
from meetups.models.image import Image
from meetups.models.user import User
from meetups.schemas.meetup import AgendaItemCreate, MeetupCreate


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result
        with pytest.raises(NotFoundError):
            await service.find_by_id(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite with foreign keys enforced; discarded after each test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Sessions configured like the application's, all sharing one in-memory database."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(db_session):
    """Factory: `await make_user("Ada Lovelace")` returns a flushed User."""

    async def _make(fullname: str = "Ada Lovelace", email=None) -> User:
        user = User(fullname=fullname, email=email)
        db_session.add(user)
        await db_session.flush()
        return user

    return _make


@pytest.fixture
def make_image(db_session):
    """Factory: `await make_image(owner)` returns a flushed Image."""

    async def _make(owner: User, url: str = "https://cdn.example.com/cover.png") -> Image:
        image = Image(url=url, user_id=owner.id)
        db_session.add(image)
        await db_session.flush()
        return image

    return _make


@pytest.fixture
def meetup_data():
    return MeetupCreate(
        title="Python Evening",
        description="Async all the things",
        place="Main hall",
        date=datetime(2026, 11, 5, 18, 30, tzinfo=timezone.utc),
        agenda=[
            AgendaItemCreate(starts_at="18:30", ends_at="19:00", type=AgendaItemType.REGISTRATION),
            AgendaItemCreate(
                starts_at="19:00",
                ends_at="19:45",
                type=AgendaItemType.TALK,
                title="Structured concurrency",
                speaker="Grace Hopper",
                language=Language.EN,
            ),
        ],
    )
