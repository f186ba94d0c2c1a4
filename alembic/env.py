"""
Alembic Environment for the Library API

The database URL comes from library_api settings (DATABASE_URL), never
from alembic.ini, so migrations always hit the same database as the app.

Every model module is imported through library_api.models so that
Base.metadata knows all tables (catalogue, access control, reader
activity, lending, book requests, site content) before autogenerate
compares it with the database.

Usage:
    alembic upgrade head                    # apply migrations
    alembic upgrade head --sql > out.sql    # offline: write SQL only
    alembic revision --autogenerate -m "add column"
    alembic downgrade -1
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

# =============================================================================
# APPLICATION METADATA
# =============================================================================
from library_api.config import get_settings
from library_api.database import Base
import library_api.models  # noqa: F401 - registers every table on Base.metadata

settings = get_settings()

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _configure(**kwargs) -> None:
    """
    Shared context options.

    SQLite cannot ALTER constraints in place, so its migrations run in
    batch mode (copy and move the table).
    """
    url = config.get_main_option("sqlalchemy.url") or ""
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        render_as_batch=_is_sqlite(url),
        **kwargs,
    )


# =============================================================================
# MIGRATION MODES
# =============================================================================
def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting to the database."""
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect and apply migrations; one unpooled connection per run."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        _configure(connection=connection)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
