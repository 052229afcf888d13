# src/duk_scoring/models/vote.py
"""Models capturing voting interactions on posts and comments."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from duk_scoring.db.session import Base
from duk_scoring.db.time import utcnow

VOTE_UP = "up"
VOTE_DOWN = "down"


class Vote(Base):
    """Per-user vote on a single content item.

    The target is stored as a tagged pair ``(target_kind, target_id)``.
    """

    __tablename__ = "vote"
    __table_args__ = (
        CheckConstraint("polarity IN ('up', 'down')", name="ck_vote_polarity"),
        CheckConstraint("target_kind IN ('post', 'comment')", name="ck_vote_target_kind"),
        # One row per voter and target; re-voting replaces it.
        UniqueConstraint("voter_id", "target_kind", "target_id", name="uq_vote_voter_target"),
        Index("ix_vote_target", "target_kind", "target_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voter_id: Mapped[str] = mapped_column(Text, nullable=False)
    target_kind: Mapped[str] = mapped_column(Text, nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    polarity: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
