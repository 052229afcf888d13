"""Data access helpers for the score and status columns of content items."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from duk_scoring.core.errors import DependencyError, NotFoundError
from duk_scoring.models.content import Comment, ContentKind, ContentRef, Post

__all__ = ["ContentRepository", "ContentItem"]

logger = logging.getLogger(__name__)

ContentItem = Post | Comment


class ContentRepository:
    """Thin wrapper around database access for posts and comments.

    Reads ``body``/``created_at``/``engagement_count`` and writes only the
    moderation and score columns.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, ref: ContentRef) -> ContentItem | None:
        """Return a content item by reference regardless of visibility."""
        return self.session.get(ref.model, ref.id)

    def get_or_404(self, ref: ContentRef) -> ContentItem:
        """Return a content item or raise :class:`NotFoundError`."""
        item = self.get(ref)
        if item is None:
            raise NotFoundError(f"{ref.kind.value.capitalize()} not found")
        return item

    def lock_visible(self, ref: ContentRef) -> ContentItem:
        """Return a visible content item, holding a row lock until commit.

        Posts are visible until removed; comments must also be approved.
        Backends without ``FOR UPDATE`` support (SQLite) ignore the lock and
        rely on their database-level write lock instead.
        """
        model = ref.model
        stmt = select(model).where(model.id == ref.id, model.is_removed.is_(False))
        if ref.kind is ContentKind.COMMENT:
            stmt = stmt.where(Comment.is_approved.is_(True))
        item = self.session.execute(stmt.with_for_update()).scalars().first()
        if item is None:
            raise NotFoundError(
                f"{ref.kind.value.capitalize()} not found or not accessible"
            )
        return item

    def list_rankable_posts(self) -> list[Post]:
        """Return posts whose hot score is maintained (approved, not removed)."""
        stmt = select(Post).where(Post.is_approved.is_(True), Post.is_removed.is_(False))
        return list(self.session.execute(stmt).scalars())

    def touch(self, item: ContentItem, now: datetime) -> None:
        """Record that the engine wrote to ``item``."""
        item.updated_at = now

    def flush(self, action: str) -> None:
        """Flush pending writes, converting store failures to DependencyError."""
        try:
            self.session.flush()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Content store rejected %s: %s", action, exc)
            raise DependencyError(f"Failed to persist {action}; retry the request") from exc

    def commit(self, action: str) -> None:
        """Commit a primary effect, converting store failures to DependencyError."""
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Content store rejected %s: %s", action, exc)
            raise DependencyError(f"Failed to persist {action}; retry the request") from exc
