"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import CommunityOut, PostOut
from .moderation import AuditEntryResponse, ModerationRequest, ModerationResponse
from .search import (
    SearchHit,
    SearchRequest,
    SearchResponse,
    TrendingRecordRequest,
    TrendingRecordResponse,
    TrendingTopicOut,
)
from .vote import VoteCreate, VoteResponse, VoterVoteResponse

__all__ = [
    "CommunityOut", "PostOut",
    "AuditEntryResponse", "ModerationRequest", "ModerationResponse",
    "SearchHit", "SearchRequest", "SearchResponse",
    "TrendingRecordRequest", "TrendingRecordResponse", "TrendingTopicOut",
    "VoteCreate", "VoteResponse", "VoterVoteResponse",
]
