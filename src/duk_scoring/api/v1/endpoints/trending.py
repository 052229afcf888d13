"""Trending topic endpoints for the Duk scoring API."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Query

from duk_scoring.api.v1.dependencies import SessionDep
from duk_scoring.core.settings import settings
from duk_scoring.db.time import utcnow
from duk_scoring.schemas.search import (
    TrendingRecordRequest,
    TrendingRecordResponse,
    TrendingTopicOut,
)
from duk_scoring.services import trending

router = APIRouter(prefix="/trending", tags=["trending"])


@router.post("/", response_model=TrendingRecordResponse)
async def record_trending(request: TrendingRecordRequest, db: SessionDep) -> TrendingRecordResponse:
    """Count the keywords of submitted text; reports whether the update stuck."""
    limit = request.limit or settings.trending_submission_limit
    topics = trending.record_best_effort(db, request.text, limit)
    return TrendingRecordResponse(success=topics is not None, topics=topics or [])


@router.get("/", response_model=list[TrendingTopicOut])
async def get_trending(
    db: SessionDep,
    limit: int = Query(10, ge=1, le=100),
    window_hours: int | None = Query(None, ge=1),
) -> list[TrendingTopicOut]:
    """Return the most frequently seen topics, optionally within a recent window."""
    since = utcnow() - timedelta(hours=window_hours) if window_hours else None
    topics = trending.list_trending(db, limit=limit, since=since)
    return [TrendingTopicOut.model_validate(topic) for topic in topics]
