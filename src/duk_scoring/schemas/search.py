"""Search and trending Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from duk_scoring.core.settings import settings


class SearchRequest(BaseModel):
    """Schema for a keyword search."""

    query: str
    type: Literal["all", "posts", "communities"] = "all"
    limit: int = Field(default_factory=lambda: settings.search_default_limit, ge=1, le=100)


class SearchHit(BaseModel):
    """One ranked search result."""

    type: Literal["post", "community"]
    data: dict[str, Any]
    relevance: float


class SearchResponse(BaseModel):
    """Schema for ranked search results."""

    success: bool = True
    results: list[SearchHit]
    query: str


class TrendingRecordRequest(BaseModel):
    """Schema for feeding submitted text into the trending table."""

    text: str = Field(..., min_length=1)
    limit: int | None = Field(None, ge=1, le=20)


class TrendingRecordResponse(BaseModel):
    """Schema acknowledging a trending update."""

    success: bool
    topics: list[str]


class TrendingTopicOut(BaseModel):
    """Schema for a trending topic and its running frequency."""

    model_config = ConfigDict(from_attributes=True)

    topic: str
    frequency: int
    last_updated: datetime
