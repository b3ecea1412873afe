"""
Alembic environment.

Reads the database URL from the app settings so migrations and the API
always target the same database.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from app.db import Base, database_url
from app.models.event import Event  # noqa: F401
from app.models.goal import Goal  # noqa: F401
from app.models.job import Job  # noqa: F401
from app.models.journal_entry import JournalEntry  # noqa: F401
from app.models.note import Note  # noqa: F401
from app.models.photo import PhotoBlob  # noqa: F401
from app.models.weekly_feature import WeeklyFeature  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Metadata for autogenerate
target_metadata = Base.metadata


def get_url() -> str:
    return database_url().render_as_string(hide_password=False)


def run_migrations_offline() -> None:
    """Emit SQL without connecting to the database."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
