"""Model for keyword frequencies feeding the trending list."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from duk_scoring.db.session import Base
from duk_scoring.db.time import utcnow


class TrendingTopic(Base):
    """Running sighting count for a single keyword."""

    __tablename__ = "trending_topic"
    __table_args__ = (
        CheckConstraint("frequency >= 1", name="ck_trending_topic_frequency"),
        Index("ix_trending_topic_frequency", "frequency"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    topic: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    frequency: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
