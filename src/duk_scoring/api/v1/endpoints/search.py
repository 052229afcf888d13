"""Search endpoints for the Duk scoring API."""

from __future__ import annotations

from fastapi import APIRouter

from duk_scoring.api.v1.dependencies import SessionDep
from duk_scoring.core.settings import settings
from duk_scoring.schemas.common import CommunityOut, PostOut
from duk_scoring.schemas.search import SearchHit, SearchRequest, SearchResponse
from duk_scoring.services import search as search_service
from duk_scoring.services import trending

router = APIRouter(prefix="/search", tags=["search"])


def _to_hit(result: search_service.SearchResult) -> SearchHit:
    schema = PostOut if result.type == "post" else CommunityOut
    return SearchHit(
        type=result.type,
        data=schema.model_validate(result.item).model_dump(mode="json"),
        relevance=result.relevance,
    )


@router.post("/", response_model=SearchResponse)
async def search_content(request: SearchRequest, db: SessionDep) -> SearchResponse:
    """Search posts and communities and feed the query into trending topics."""
    results = search_service.search(db, request.query, request.type, request.limit)
    query = request.query.strip()
    trending.record_best_effort(db, query, settings.trending_query_limit)
    return SearchResponse(results=[_to_hit(result) for result in results], query=query)
