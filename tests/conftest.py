# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from duk_scoring.db.session import Base
from duk_scoring.db.session import get_db as app_get_session
from duk_scoring.main import app as fastapi_app
from duk_scoring.models import Comment, Community, Post
from duk_scoring.models.content import (
    MODERATION_STATUS_APPROVED,
    MODERATION_STATUS_PENDING,
)

TEST_DB_URL = "sqlite://"

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.fixture()
def now() -> datetime:
    """Fixed reference time shared by fixtures and assertions."""
    return FIXED_NOW


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def file_engine(tmp_path) -> Iterator[Engine]:
    """File-backed SQLite engine for tests that need real commits or several connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'duk.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn) -> None:
        # Writers queue on the database lock, standing in for row locks.
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def file_session_factory(file_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=file_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def plain_session(file_session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Session with real commits and no savepoint bookkeeping around it."""
    session = file_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def plain_client(app: FastAPI, plain_session: Session) -> Iterator[TestClient]:
    """Test client whose requests run on ``plain_session``."""

    def _get_session_override() -> Generator[Session, None, None]:
        yield plain_session

    app.dependency_overrides[app_get_session] = _get_session_override
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_plain_post(plain_session: Session) -> Callable[..., Post]:
    """Return a factory committing posts through ``plain_session``."""

    def _make_plain_post(body: str = "Waiting for review", **fields) -> Post:
        fields.setdefault("created_at", FIXED_NOW)
        post = Post(body=body, **fields)
        plain_session.add(post)
        plain_session.commit()
        return post

    return _make_plain_post


@pytest.fixture()
def community(db_session: Session) -> Iterator[Community]:
    """Create a default test community."""
    community = Community(
        name="campus",
        description="Campus life and exam schedule discussion",
        is_active=True,
    )
    db_session.add(community)
    db_session.flush()
    db_session.refresh(community)
    yield community


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts; approved unless told otherwise."""

    def _make_post(
        body: str = "Test post content",
        *,
        title: str = "Test post",
        approved: bool = True,
        removed: bool = False,
        created_at: datetime = FIXED_NOW,
        community_id: int | None = None,
        vote_score: int = 0,
        engagement_count: int = 0,
    ) -> Post:
        post = Post(
            title=title,
            body=body,
            community_id=community_id,
            created_at=created_at,
            moderation_status=MODERATION_STATUS_APPROVED if approved else MODERATION_STATUS_PENDING,
            is_approved=approved,
            is_removed=removed,
            vote_score=vote_score,
            engagement_count=engagement_count,
        )
        db_session.add(post)
        db_session.flush()
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """Create a baseline approved post."""
    return make_post()


@pytest.fixture()
def pending_post(make_post: Callable[..., Post]) -> Post:
    """Create a post that has not been moderated yet."""
    return make_post("Waiting for review", approved=False)


@pytest.fixture()
def make_comment(db_session: Session, test_post: Post) -> Callable[..., Comment]:
    """Return a factory persisting comments on ``test_post``."""

    def _make_comment(body: str = "Test comment", *, approved: bool = True) -> Comment:
        comment = Comment(
            post_id=test_post.id,
            body=body,
            created_at=FIXED_NOW,
            moderation_status=MODERATION_STATUS_APPROVED if approved else MODERATION_STATUS_PENDING,
            is_approved=approved,
        )
        db_session.add(comment)
        db_session.flush()
        return comment

    return _make_comment
