# acod/database.py
from sqlmodel import SQLModel, create_engine, Session

from acod.core.config import get_settings

settings = get_settings()


def _require_ssl(url: str) -> str:
    if "sslmode=" in url:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}sslmode=require"


def build_engine(url: str):
    """
    Engine for the configured store.

    Postgres (Supabase pooler, Session mode):
      - sslmode=require is appended when missing
      - a single pooled connection per process (pool_size=1, no overflow),
        since the pooler caps clients per project
      - pool_pre_ping drops connections the pooler has closed

    SQLite (local runs): plain engine usable across FastAPI's threadpool.
    """
    if url.startswith("sqlite"):
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})

    return create_engine(
        _require_ssl(url),
        echo=False,
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    """Create profiles, contents and content_rejections if missing (startup)."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency yielding one Session per request.

    Tests replace it through `app.dependency_overrides`.
    """
    with Session(engine) as session:
        yield session
