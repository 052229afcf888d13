"""Vote-related endpoints for the Duk scoring API."""

from typing import Literal

from fastapi import APIRouter, status

from duk_scoring.api.v1.dependencies import SessionDep, VoteAggregatorDep
from duk_scoring.schemas.vote import VoteCreate, VoteResponse, VoterVoteResponse
from duk_scoring.services.votes import resolve_target

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResponse, status_code=status.HTTP_200_OK)
async def cast_vote(
    vote_data: VoteCreate,
    db: SessionDep,
    aggregator: VoteAggregatorDep,
) -> VoteResponse:
    """Cast, change or clear a vote and return the recomputed net score."""
    vote_score = aggregator.apply_vote(
        db,
        vote_data.voter_id,
        vote_data.target,
        vote_data.vote_type,
    )
    return VoteResponse(vote_score=vote_score)


@router.get("/{target_kind}/{target_id}/voters/{voter_id}", response_model=VoterVoteResponse)
async def get_voter_vote(
    target_kind: Literal["post", "comment"],
    target_id: int,
    voter_id: str,
    db: SessionDep,
    aggregator: VoteAggregatorDep,
) -> VoterVoteResponse:
    """Get one voter's current vote on a post or comment."""
    target = resolve_target(target_kind, target_id)
    return VoterVoteResponse(vote_type=aggregator.get_vote(db, voter_id, target))
