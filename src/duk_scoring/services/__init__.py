# src/duk_scoring/services/__init__.py
"""Scoring, ranking and moderation services."""

from .audit import AuditEntry, ModerationAuditLog
from .moderation import ModerationDecisionEngine, ModerationService
from .profanity import ProfanityFilter
from .toxicity import HeuristicToxicityScorer, ToxicityModel
from .votes import VoteAggregator

__all__ = [
    "AuditEntry",
    "HeuristicToxicityScorer",
    "ModerationAuditLog",
    "ModerationDecisionEngine",
    "ModerationService",
    "ProfanityFilter",
    "ToxicityModel",
    "VoteAggregator",
]
