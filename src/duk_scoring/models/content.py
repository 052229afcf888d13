"""SQLAlchemy models for posts, comments and the shared scoring columns."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from duk_scoring.db.session import Base
from duk_scoring.db.time import utcnow

MODERATION_STATUS_PENDING = "pending"
MODERATION_STATUS_APPROVED = "approved"
MODERATION_STATUS_FLAGGED = "flagged"
MODERATION_STATUS_REJECTED = "rejected"

MODERATION_STATUSES = (
    MODERATION_STATUS_PENDING,
    MODERATION_STATUS_APPROVED,
    MODERATION_STATUS_FLAGGED,
    MODERATION_STATUS_REJECTED,
)

_STATUS_CHECK = "moderation_status IN ({})".format(
    ", ".join(f"'{status}'" for status in MODERATION_STATUSES)
)


class ContentKind(str, Enum):
    """Kinds of content the engine scores."""

    POST = "post"
    COMMENT = "comment"


@dataclass(frozen=True)
class ContentRef:
    """Tagged reference to a single post or comment.

    Replaces the pair of optional ``post_id``/``comment_id`` fields so that a
    target is always exactly one of the two.
    """

    kind: ContentKind
    id: int

    def __post_init__(self) -> None:
        # Coerce plain strings ("post") and reject anything else.
        object.__setattr__(self, "kind", ContentKind(self.kind))

    @property
    def model(self) -> type[Post] | type[Comment]:
        """Return the ORM class that stores this kind of content."""
        return Post if self.kind is ContentKind.POST else Comment

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


class ScoredContentMixin:
    """Columns the scoring engine reads and writes on every content kind.

    The engine never touches ``body`` or identity columns; it only writes the
    status and score fields.
    """

    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # pending -> approved | flagged | rejected, decided once at creation.
    moderation_status: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=MODERATION_STATUS_PENDING,
    )
    toxicity_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Net votes (#up - #down); always rewritten from a full recount.
    vote_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    engagement_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hot_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)


class Post(ScoredContentMixin, Base):
    """Top-level submission inside a community."""

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint(_STATUS_CHECK, name="ck_post_moderation_status"),
        Index("ix_post_hot_score", "hot_score"),
        Index("ix_post_community_created", "community_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    community_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("community.id"),
        nullable=True,
    )

    @property
    def kind(self) -> ContentKind:
        return ContentKind.POST


class Comment(ScoredContentMixin, Base):
    """Reply to a post, optionally nested under another comment."""

    __tablename__ = "comment"
    __table_args__ = (
        CheckConstraint(_STATUS_CHECK, name="ck_comment_moderation_status"),
        Index("ix_comment_post_id", "post_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=True,
    )

    @property
    def kind(self) -> ContentKind:
        return ContentKind.COMMENT
