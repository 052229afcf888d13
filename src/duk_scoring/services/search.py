"""Keyword search over posts and communities with lexical relevance ranking."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from duk_scoring.core.errors import ValidationError
from duk_scoring.models.community import Community
from duk_scoring.models.content import Post

logger = logging.getLogger(__name__)

SearchKind = Literal["all", "posts", "communities"]
ResultType = Literal["post", "community"]

EXACT_MATCH_WEIGHT = 0.5


@dataclass(frozen=True)
class SearchResult:
    """One ranked hit."""

    type: ResultType
    item: Post | Community
    relevance: float

    @property
    def key(self) -> tuple[str, int]:
        return (self.type, self.item.id)


def relevance(query: str, text: str) -> float:
    """Score how well ``text`` matches ``query``.

    Each query word found anywhere in the text adds 1.0, plus 0.5 for every
    whole-word occurrence.
    """
    text_lower = (text or "").lower()
    score = 0.0
    for word in query.lower().split():
        if word not in text_lower:
            continue
        score += 1.0
        matches = re.findall(rf"\b{re.escape(word)}\b", text_lower)
        score += len(matches) * EXACT_MATCH_WEIGHT
    return score


def rank(
    query: str,
    candidates: list[tuple[ResultType, Post | Community, str]],
    limit: int,
) -> list[SearchResult]:
    """Deduplicate candidates by identity, score them and keep the top ``limit``.

    The sort is stable, so equal scores keep the order the candidates were
    fetched in.
    """
    seen: set[tuple[str, int]] = set()
    results: list[SearchResult] = []
    for result_type, item, text in candidates:
        key = (result_type, item.id)
        if key in seen:
            continue
        seen.add(key)
        results.append(SearchResult(result_type, item, relevance(query, text)))

    results.sort(key=lambda result: result.relevance, reverse=True)
    return results[:limit]


def _matches_any(column, tokens: list[str]):
    return or_(*(func.lower(column).contains(token, autoescape=True) for token in tokens))


def _post_text(post: Post) -> str:
    return f"{post.title} {post.body}"


def _community_text(community: Community) -> str:
    return f"{community.name} {community.description}"


def search(
    db: Session,
    query: str,
    kind: SearchKind = "all",
    limit: int = 20,
) -> list[SearchResult]:
    """Search visible posts and active communities, ordered by relevance.

    Posts are fetched by title and by body (``limit // 2`` each) and merged;
    communities are fetched by name or description.

    Raises:
        ValidationError: If the query is blank, the kind unknown or the limit
            not positive.
    """
    query = (query or "").strip()
    if not query:
        raise ValidationError("Search query is required")
    if kind not in ("all", "posts", "communities"):
        raise ValidationError(f"Unknown search type: {kind}")
    if limit <= 0:
        raise ValidationError("Limit must be positive")

    tokens = query.lower().split()
    candidates: list[tuple[ResultType, Post | Community, str]] = []

    if kind in ("all", "posts"):
        per_field = max(limit // 2, 1)
        visible = select(Post).where(Post.is_approved.is_(True), Post.is_removed.is_(False))
        newest_first = (Post.created_at.desc(), Post.id.desc())
        by_title = db.execute(
            visible.where(_matches_any(Post.title, tokens)).order_by(*newest_first).limit(per_field)
        ).scalars().all()
        by_body = db.execute(
            visible.where(_matches_any(Post.body, tokens)).order_by(*newest_first).limit(per_field)
        ).scalars().all()
        candidates.extend(("post", post, _post_text(post)) for post in [*by_title, *by_body])

    if kind in ("all", "communities"):
        communities = db.execute(
            select(Community)
            .where(
                Community.is_active.is_(True),
                or_(_matches_any(Community.name, tokens), _matches_any(Community.description, tokens)),
            )
            .order_by(Community.id)
            .limit(limit)
        ).scalars().all()
        candidates.extend(
            ("community", community, _community_text(community)) for community in communities
        )

    results = rank(query, candidates, limit)
    logger.debug("Search %r matched %d candidates, returning %d", query, len(candidates), len(results))
    return results
