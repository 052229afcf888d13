# src/duk_scoring/schemas/vote.py
"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from duk_scoring.models.content import ContentKind, ContentRef


class VoteCreate(BaseModel):
    """Schema for casting, changing or clearing a vote.

    Exactly one of ``post_id`` and ``comment_id`` must be given.
    """

    voter_id: str = Field(..., min_length=1)
    post_id: int | None = None
    comment_id: int | None = None
    vote_type: Literal["up", "down"] | None = Field(
        ...,
        description="'up', 'down', or null to remove the vote",
    )

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "VoteCreate":
        if (self.post_id is None) == (self.comment_id is None):
            raise ValueError("Must specify either post_id or comment_id, but not both")
        return self

    @property
    def target(self) -> ContentRef:
        if self.post_id is not None:
            return ContentRef(ContentKind.POST, self.post_id)
        return ContentRef(ContentKind.COMMENT, self.comment_id)


class VoteResponse(BaseModel):
    """Schema for the recomputed score after a vote."""

    success: bool = True
    vote_score: int


class VoterVoteResponse(BaseModel):
    """Schema for a single voter's current vote on a target."""

    vote_type: Literal["up", "down"] | None
