"""Engine, session factory and the request-scoped session dependency."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from duk_scoring.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for content, vote, audit and trending tables."""


# Models register themselves on Base.metadata when imported.
import duk_scoring.models  # noqa: E402,F401


def _connect_args(url: str) -> dict[str, object]:
    # FastAPI resolves sync dependencies in a worker thread, not the request's.
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.effective_database_url,
    connect_args=_connect_args(settings.effective_database_url),
    pool_pre_ping=True,
    echo=settings.sql_debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session that is closed once the request finishes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create the engine's tables without going through Alembic."""
    Base.metadata.create_all(bind=engine)
