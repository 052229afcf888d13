"""Shared API dependencies for the scoring endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from duk_scoring.db.session import get_db
from duk_scoring.services.moderation import ModerationService
from duk_scoring.services.votes import VoteAggregator

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

_moderation_service = ModerationService()
_vote_aggregator = VoteAggregator()


def get_moderation_service() -> ModerationService:
    """Return the shared moderation service."""
    return _moderation_service


def get_vote_aggregator() -> VoteAggregator:
    """Return the shared vote aggregator."""
    return _vote_aggregator


ModerationServiceDep = Annotated[ModerationService, Depends(get_moderation_service)]
VoteAggregatorDep = Annotated[VoteAggregator, Depends(get_vote_aggregator)]
