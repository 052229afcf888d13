"""Moderation-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ModerationRequest(BaseModel):
    """Schema for submitting freshly created content for automated review."""

    content_id: int
    content_type: Literal["post", "comment"]
    content: str = Field(..., description="Submitted text to evaluate")


class ModerationResponse(BaseModel):
    """Schema for the automated decision returned to the caller."""

    decision: Literal["approve", "flag", "reject"]
    toxicity_score: float = Field(..., ge=0.0, le=1.0)
    auto_approved: bool


class AuditEntryResponse(BaseModel):
    """Schema for one row of a content item's moderation history."""

    model_config = ConfigDict(from_attributes=True)

    moderator_id: str
    target_type: str
    target_id: int
    action: str
    reason: str | None
    automated: bool
