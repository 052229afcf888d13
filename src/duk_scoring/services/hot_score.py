"""Time-decayed ranking ("hot") scores for feeds."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal

from sqlalchemy import select
from sqlalchemy.orm import Session

from duk_scoring.core.errors import ValidationError
from duk_scoring.core.settings import settings
from duk_scoring.db.time import ensure_aware, utcnow
from duk_scoring.models.content import ContentRef, Post
from duk_scoring.repositories.content_repo import ContentItem, ContentRepository

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0

FeedSort = Literal["hot", "new", "top"]


def calculate_hot_score(
    net_vote_score: int,
    engagement_count: int,
    created_at: datetime,
    now: datetime,
    *,
    gravity: float | None = None,
    engagement_weight: float | None = None,
    min_age_hours: float | None = None,
) -> float:
    """Return ``base / (age_hours + 2) ** gravity``.

    ``base`` is the net vote score plus weighted engagement. Age is clamped to
    ``min_age_hours`` so clock skew can never produce a zero or negative age.

    Args:
        net_vote_score: Upvotes minus downvotes.
        engagement_count: Non-negative engagement signal (e.g. comment count).
        created_at: Creation time of the item.
        now: Reference time for the age calculation.

    Returns:
        The hot score; identical inputs always give an identical result.
    """
    gravity = settings.hot_score_gravity if gravity is None else gravity
    weight = settings.hot_score_engagement_weight if engagement_weight is None else engagement_weight
    floor = settings.hot_score_min_age_hours if min_age_hours is None else min_age_hours

    elapsed = (ensure_aware(now) - ensure_aware(created_at)).total_seconds() / SECONDS_PER_HOUR
    age_hours = max(elapsed, floor)
    base = net_vote_score + engagement_count * weight
    return base / (age_hours + 2) ** gravity


def score_item(item: ContentItem, now: datetime) -> float:
    """Recompute and store the hot score of an already-loaded item."""
    item.hot_score = calculate_hot_score(
        item.vote_score,
        item.engagement_count,
        item.created_at,
        now,
    )
    return item.hot_score


def refresh_hot_score(session: Session, ref: ContentRef, now: datetime | None = None) -> float:
    """Recompute one item's hot score from its stored state and commit it."""
    repo = ContentRepository(session)
    item = repo.get_or_404(ref)
    now = now or utcnow()
    score = score_item(item, now)
    repo.touch(item, now)
    repo.commit(f"hot score for {ref}")
    return score


def refresh_hot_scores(session: Session, now: datetime | None = None) -> int:
    """Recompute the hot score of every rankable post.

    Intended for a periodic job; returns the number of posts updated.
    """
    repo = ContentRepository(session)
    now = now or utcnow()
    posts = repo.list_rankable_posts()
    for post in posts:
        score_item(post, now)
    repo.commit("bulk hot score refresh")
    logger.info("Refreshed hot scores for %d posts", len(posts))
    return len(posts)


def list_posts(
    session: Session,
    sort: FeedSort = "hot",
    *,
    community_id: int | None = None,
    limit: int = 20,
) -> list[Post]:
    """Return approved, visible posts ordered for a feed.

    ``hot`` orders by stored hot score, ``top`` by net votes, ``new`` by
    creation time; ties fall back to newest first.
    """
    order_columns = {
        "hot": Post.hot_score.desc(),
        "top": Post.vote_score.desc(),
        "new": Post.created_at.desc(),
    }
    if sort not in order_columns:
        raise ValidationError(f"Unknown feed sort: {sort}")

    stmt = select(Post).where(Post.is_approved.is_(True), Post.is_removed.is_(False))
    if community_id is not None:
        stmt = stmt.where(Post.community_id == community_id)
    stmt = stmt.order_by(order_columns[sort], Post.created_at.desc(), Post.id.desc()).limit(limit)
    return list(session.execute(stmt).scalars())
