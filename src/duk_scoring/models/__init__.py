# src/duk_scoring/models/__init__.py
"""SQLAlchemy models for the Duk scoring engine."""

from .community import Community
from .content import Comment, ContentKind, ContentRef, Post
from .moderation import ModerationLog
from .trending import TrendingTopic
from .vote import Vote

__all__ = [
    "Community",
    "Comment", "ContentKind", "ContentRef", "Post",
    "ModerationLog",
    "TrendingTopic",
    "Vote",
]
