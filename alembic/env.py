"""
Alembic environment for the Bookshelf database.

The URL comes from BOOKSHELF_DATABASE_URL (or settings), and online
migrations run over the same asyncpg driver the application uses.
``prepend_sys_path = src`` in alembic.ini makes the package importable.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context  # type: ignore[reportMissingImports]
from bookshelf.config import get_database_url
from bookshelf.database.connection import to_async_url
from bookshelf.dbmodels import target_metadata

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name, disable_existing_loggers=False)


def migrate(connection: Connection | None = None) -> None:
    if connection is None:
        # Offline mode renders SQL instead of executing it
        context.configure(
            url=get_database_url(),
            target_metadata=target_metadata,
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
        )
    else:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)

    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    engine = create_async_engine(to_async_url(get_database_url()), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    migrate()
else:
    asyncio.run(migrate_online())
