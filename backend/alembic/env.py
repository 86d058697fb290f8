"""Alembic environment — migrations for the users and dogs tables.

Both supported backends run through the same async path: asyncpg for
PostgreSQL deployments, aiosqlite for local databases.

Invariants:
    - target_metadata is dog_adoption's Base.metadata with User and Dog registered
    - The URL comes from the application Settings when DATABASE_URL is set,
      so migrations and the API always agree on the database
    - NullPool: a migration run holds exactly one connection and releases it

Design Decisions:
    - render_as_batch on SQLite: ALTER TABLE there cannot change constraints,
      batch mode rebuilds the table instead (the CHECK constraints on dogs need it)
    - compare_type on: autogenerate picks up String length changes
      (name/description/adoption_message limits live in the column types)
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from dog_adoption.config import get_settings
from dog_adoption.db.base import Base
from dog_adoption.models import Dog, User  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    """Settings URL (with the asyncpg rewrite) when configured, else alembic.ini."""
    if os.environ.get("DATABASE_URL"):
        return get_settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure(url: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=url.startswith("sqlite"),
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the users/dogs schema without connecting."""
    url = _database_url()
    _configure(
        url,
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection, url: str) -> None:
    _configure(url, connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply pending revisions over one async connection."""
    url = _database_url()
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = url
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync, url)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
