"""Feed endpoints for listing ranked posts."""
from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query

from duk_scoring.api.v1.dependencies import SessionDep
from duk_scoring.schemas.common import PostOut
from duk_scoring.services import hot_score

router = APIRouter(prefix="/feed", tags=["feed"])


@router.post("/refresh")
async def refresh_feed(db: SessionDep) -> dict[str, int]:
    """Recompute hot scores for every rankable post."""
    return {"updated": hot_score.refresh_hot_scores(db)}


@router.get("/{sort}", response_model=list[PostOut])
async def get_feed(
    sort: Literal["hot", "new", "top"],
    db: SessionDep,
    community_id: int | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
) -> list[PostOut]:
    """Return approved posts ordered by hot score, recency or net votes."""
    posts = hot_score.list_posts(db, sort, community_id=community_id, limit=limit)
    return [PostOut.model_validate(post) for post in posts]
