"""Shared Pydantic schemas for content returned by the API."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PostOut(BaseModel):
    """Ranked post as exposed to feed and search clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str
    community_id: int | None
    moderation_status: str
    vote_score: int
    engagement_count: int
    hot_score: float
    created_at: datetime


class CommunityOut(BaseModel):
    """Community summary returned by search."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
