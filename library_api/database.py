"""
Database Engine and Sessions

Synchronous SQLAlchemy 2.0. Route handlers are plain `def` functions
that FastAPI runs in its threadpool, each with its own Session:

    request -> get_db() opens a Session
            -> services read/write and commit (or roll back) through it
            -> get_db() closes it when the response is sent

PostgreSQL (psycopg2) is the production datastore. SQLite URLs are
accepted too; the test suite runs on an in-memory SQLite database.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from library_api.config import get_settings

settings = get_settings()


def _engine_options(url: str) -> dict:
    # SQLite takes no pool sizing and is single-threaded by default
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False)


class Base(DeclarativeBase):
    """Declarative base of every library table."""


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """Per-request Session, closed even when the handler raised."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """
    Create every table that does not exist yet.

    Used by the seed script on a fresh database; deployments run the
    Alembic migrations instead.
    """
    import library_api.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
