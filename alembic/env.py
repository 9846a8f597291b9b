"""
Alembic Migration Environment
===============================

What:  Runs the meetups revisions against `settings.database_url`.
How:   Offline mode renders SQL for the configured dialect; online mode
       opens a NullPool async engine and hands its sync connection to
       Alembic through `run_sync()`.

Both modes configure the context the same way (see `_configure`), so a
revision behaves identically whether it is applied or rendered.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool
from alembic import context

from meetups.config import settings
from meetups.database import Base

import meetups.models  # noqa: F401  (registers tables)

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _configure(**options) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        # SQLite cannot ALTER constraints in place
        render_as_batch=settings.is_sqlite,
        **options,
    )


def _apply(connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def _apply_online() -> None:
    migration_engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with migration_engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await migration_engine.dispose()


if context.is_offline_mode():
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    asyncio.run(_apply_online())
