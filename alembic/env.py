"""Alembic environment configuration for followgraph.

The database URL comes from :class:`FollowgraphSettings` (so
``FOLLOWGRAPH_DATABASE_URL``, ``.env`` and the default SQLite file under
``FOLLOWGRAPH_DATA_DIR`` all apply), unless ``alembic -x url=...`` is given.
"""

from __future__ import annotations

from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import engine_from_config, pool

from alembic import context

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

import followgraph.core.orm.tables  # noqa: E402, F401
from followgraph.core.orm.base import FollowgraphBase  # noqa: E402
from followgraph.core.settings import get_settings  # noqa: E402


def _database_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    if override:
        return override
    settings = get_settings()
    if settings.database_url is None:
        Path(settings.data_dir).expanduser().mkdir(parents=True, exist_ok=True)
    return settings.resolved_database_url()


# configparser treats "%" as interpolation.
config.set_main_option("sqlalchemy.url", _database_url().replace("%", "%%"))

target_metadata = FollowgraphBase.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (SQL script output only)."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (live database connection)."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
