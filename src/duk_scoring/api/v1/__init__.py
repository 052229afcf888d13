# src/duk_scoring/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    feed_router,
    moderation_router,
    search_router,
    trending_router,
    votes_router,
)

__all__ = [
    "feed_router",
    "moderation_router",
    "search_router",
    "trending_router",
    "votes_router",
]
