# app/database.py
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Engine setup
#
# SQLite (default / tests):
#   - check_same_thread=False : sync endpoints run on FastAPI's threadpool
#   - in-memory URLs share one connection (StaticPool), otherwise every
#     pooled connection would see its own empty database
#
# Postgres and friends:
#   - pool_pre_ping=True      : validate connections before using them
#   - pool size / overflow from settings
#   - sslmode appended when DATABASE_SSLMODE is set
# ---------------------------------------------------------

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def _database_url() -> str:
    db_url = settings.DATABASE_URL
    if db_url.startswith("sqlite") or not settings.DATABASE_SSLMODE:
        return db_url

    # Append sslmode if it is not already present
    if "sslmode=" not in db_url:
        separator = "&" if "?" in db_url else "?"
        db_url = f"{db_url}{separator}sslmode={settings.DATABASE_SSLMODE}"
    return db_url


def _engine_options(db_url: str) -> dict:
    if db_url.startswith("sqlite"):
        options: dict = {"connect_args": {"check_same_thread": False}}
        if db_url in IN_MEMORY_SQLITE_URLS:
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
    }


db_url = _database_url()

engine = create_engine(
    db_url,
    echo=False,        # set to True if you want to debug SQL queries
    **_engine_options(db_url),
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def drop_db_and_tables() -> None:
    """Drop every table known to SQLModel metadata (used by the test suite)."""
    SQLModel.metadata.drop_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
