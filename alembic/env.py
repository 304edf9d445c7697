from logging.config import fileConfig

from sqlmodel import SQLModel

from alembic import context

from passprobe.config.settings import get_settings
from passprobe.database.adapter import create_engine_from_url
from passprobe.database.migrations import resolve_database_url

# Import all database models for autogenerate support
from passprobe.models.db_models import *  # noqa: F403, F401

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
# This line sets up loggers basically.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def run_migrations_online() -> None:
    """Run migrations against the database named by the environment.

    The connection string comes from DATABASE_URL, or from the scenario
    selected by PASSPROBE_TEST_SCENARIO. It is parsed into a structured
    configuration instead of being stored in sqlalchemy.url, so passwords
    never pass through ConfigParser interpolation.
    """
    settings = get_settings()
    database_url = resolve_database_url(settings)

    connectable = create_engine_from_url(
        database_url,
        connect_timeout=settings.connect_timeout,
        odbc_driver=settings.odbc_driver,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
        )

        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


# Run migrations online (the harness never generates offline SQL)
run_migrations_online()
