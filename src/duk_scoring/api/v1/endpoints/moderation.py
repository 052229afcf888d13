"""Moderation-related endpoints for the Duk scoring API."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, status
from sqlalchemy.orm import Session

from duk_scoring.api.v1.dependencies import ModerationServiceDep, SessionDep
from duk_scoring.core.settings import settings
from duk_scoring.models.content import ContentKind, ContentRef
from duk_scoring.repositories.content_repo import ContentRepository
from duk_scoring.schemas.moderation import (
    AuditEntryResponse,
    ModerationRequest,
    ModerationResponse,
)
from duk_scoring.services import trending
from duk_scoring.services.audit import ModerationAuditLog

router = APIRouter(prefix="/moderation", tags=["moderation"])


def _trending_text(db: Session, ref: ContentRef, content: str) -> str:
    """Posts contribute their title ahead of the body."""
    if ref.kind is ContentKind.POST:
        post = ContentRepository(db).get(ref)
        if post is not None and post.title:
            return f"{post.title} {content}"
    return content


@router.post("/", response_model=ModerationResponse, status_code=status.HTTP_200_OK)
async def moderate_content(
    request: ModerationRequest,
    db: SessionDep,
    moderation_service: ModerationServiceDep,
) -> ModerationResponse:
    """Run automated moderation on a freshly submitted post or comment."""
    ref = ContentRef(request.content_type, request.content_id)
    outcome = moderation_service.moderate(db, ref, request.content)

    # Trending runs on submission text whatever the decision was.
    if outcome.reevaluated:
        trending.record_best_effort(
            db,
            _trending_text(db, ref, request.content),
            settings.trending_submission_limit,
        )

    return ModerationResponse(
        decision=outcome.decision,
        toxicity_score=outcome.toxicity_score,
        auto_approved=outcome.auto_approved,
    )


@router.get("/{content_type}/{content_id}/log", response_model=list[AuditEntryResponse])
async def get_moderation_log(
    content_type: Literal["post", "comment"],
    content_id: int,
    db: SessionDep,
) -> list[AuditEntryResponse]:
    """Return the moderation history recorded for one content item."""
    entries = ModerationAuditLog.entries_for(db, ContentRef(content_type, content_id))
    return [AuditEntryResponse.model_validate(entry) for entry in entries]
