"""Data access helpers for the content store."""

from .content_repo import ContentRepository

__all__ = ["ContentRepository"]
