# src/duk_scoring/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .feed import router as feed_router
from .moderation import router as moderation_router
from .search import router as search_router
from .trending import router as trending_router
from .votes import router as votes_router

__all__ = [
    "feed_router",
    "moderation_router",
    "search_router",
    "trending_router",
    "votes_router",
]
