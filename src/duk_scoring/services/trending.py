"""Keyword extraction and running frequency table for trending topics."""

from __future__ import annotations

import logging
import re
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from duk_scoring.core.errors import DependencyError
from duk_scoring.core.settings import settings
from duk_scoring.db.time import utcnow
from duk_scoring.models.trending import TrendingTopic
from duk_scoring.services.side_channel import run_best_effort

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]")

STOPWORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "any", "can",
        "had", "her", "was", "one", "our", "out", "his", "has", "how", "its",
        "who", "did", "yes", "get", "got", "him", "she", "too", "use", "that",
        "this", "with", "from", "have", "they", "will", "what", "when", "your",
        "been", "were", "than", "then", "them", "into", "just", "also",
    }
)


def extract(
    text: str,
    limit: int,
    *,
    min_length: int | None = None,
    max_length: int | None = None,
) -> list[str]:
    """Return the first ``limit`` candidate topics from ``text`` in order of appearance.

    Text is lowercased and stripped of punctuation before splitting on
    whitespace. Stopwords are dropped, and a token is kept only when
    ``min_length <= len(token) < max_length``. A word repeated in the text is
    returned, and later counted, once per occurrence.
    """
    min_length = settings.trending_min_token_length if min_length is None else min_length
    max_length = settings.trending_max_token_length if max_length is None else max_length
    if limit <= 0:
        return []

    cleaned = _NON_WORD.sub("", (text or "").lower())
    topics = [
        token
        for token in cleaned.split()
        if token not in STOPWORDS and min_length <= len(token) < max_length
    ]
    return topics[:limit]


def _dialect_insert(session: Session):
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise DependencyError(f"Trending upsert is not supported on {dialect}")
    return insert


def upsert(session: Session, topic: str, now: datetime | None = None) -> None:
    """Count one sighting of ``topic``.

    Issues a single ``INSERT ... ON CONFLICT DO UPDATE`` so concurrent
    sightings of the same topic are serialized by the database and none is lost.
    """
    now = now or utcnow()
    insert = _dialect_insert(session)
    stmt = insert(TrendingTopic).values(topic=topic, frequency=1, last_updated=now)
    stmt = stmt.on_conflict_do_update(
        index_elements=[TrendingTopic.topic],
        set_={
            "frequency": TrendingTopic.frequency + 1,
            "last_updated": stmt.excluded.last_updated,
        },
    )
    session.execute(stmt)


def record(
    session: Session,
    text: str,
    limit: int,
    now: datetime | None = None,
) -> list[str]:
    """Extract topics from ``text`` and count every returned occurrence."""
    now = now or utcnow()
    topics = extract(text, limit)
    for topic in topics:
        upsert(session, topic, now)
    logger.debug("Recorded trending topics %s", topics)
    return topics


def record_best_effort(session: Session, text: str, limit: int) -> list[str] | None:
    """Record topics after a primary commit.

    Returns:
        The recorded topics, or ``None`` if the update failed and was dropped.
    """
    return run_best_effort(
        session,
        "trending update",
        lambda sess: record(sess, text, limit),
    )


def list_trending(
    session: Session,
    limit: int = 10,
    since: datetime | None = None,
) -> list[TrendingTopic]:
    """Return the most frequent topics, most recently seen first on ties.

    ``since`` restricts the list to topics seen inside a time window.
    """
    stmt = select(TrendingTopic)
    if since is not None:
        stmt = stmt.where(TrendingTopic.last_updated >= since)
    stmt = stmt.order_by(
        TrendingTopic.frequency.desc(),
        TrendingTopic.last_updated.desc(),
        TrendingTopic.topic,
    ).limit(limit)
    # Upserts bypass the identity map; reload rows instead of trusting it.
    stmt = stmt.execution_options(populate_existing=True)
    return list(session.execute(stmt).scalars())
