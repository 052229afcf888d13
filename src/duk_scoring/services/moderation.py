# src/duk_scoring/services/moderation.py
"""Automated moderation of freshly submitted posts and comments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from sqlalchemy.orm import Session

from duk_scoring.core.errors import ValidationError
from duk_scoring.core.settings import settings
from duk_scoring.db.time import utcnow
from duk_scoring.models.content import (
    MODERATION_STATUS_APPROVED,
    MODERATION_STATUS_FLAGGED,
    MODERATION_STATUS_PENDING,
    MODERATION_STATUS_REJECTED,
    ContentRef,
)
from duk_scoring.repositories.content_repo import ContentItem, ContentRepository
from duk_scoring.services.audit import AuditEntry, ModerationAuditLog
from duk_scoring.services.hot_score import score_item
from duk_scoring.services.profanity import ProfanityFilter, ProfanityResult
from duk_scoring.services.toxicity import HeuristicToxicityScorer, ToxicityModel, ToxicityResult

logger = logging.getLogger(__name__)

ModerationAction = Literal["approve", "flag", "reject"]

ACTION_TO_STATUS: dict[str, str] = {
    "approve": MODERATION_STATUS_APPROVED,
    "flag": MODERATION_STATUS_FLAGGED,
    "reject": MODERATION_STATUS_REJECTED,
}
STATUS_TO_ACTION: dict[str, str] = {status: action for action, status in ACTION_TO_STATUS.items()}

REASON_HIGH_TOXICITY = "High toxicity score detected"
REASON_MODERATE_TOXICITY = "Moderate toxicity score, requires manual review"
REASON_PASSED = "Content passed automated moderation checks"


@dataclass(frozen=True)
class ModerationDecision:
    """Outcome of a single evaluation; projected onto the item and the audit log."""

    action: ModerationAction
    reason: str
    toxicity_score: float

    @property
    def status(self) -> str:
        return ACTION_TO_STATUS[self.action]


@dataclass(frozen=True)
class ModerationOutcome:
    """What the caller of :meth:`ModerationService.moderate` gets back."""

    decision: ModerationAction
    toxicity_score: float
    reevaluated: bool = True

    @property
    def auto_approved(self) -> bool:
        return self.decision == "approve"


class ModerationDecisionEngine:
    """Turn filter and scorer output into approve / flag / reject.

    Comparisons are strict: a score equal to a threshold does not cross it.
    """

    def __init__(
        self,
        reject_threshold: float | None = None,
        flag_threshold: float | None = None,
    ) -> None:
        self.reject_threshold = (
            settings.moderation_reject_threshold if reject_threshold is None else reject_threshold
        )
        self.flag_threshold = (
            settings.moderation_flag_threshold if flag_threshold is None else flag_threshold
        )

    def decide(self, profanity: ProfanityResult, toxicity: ToxicityResult) -> ModerationDecision:
        if toxicity.value > self.reject_threshold or profanity.matched:
            if profanity.matched:
                reason = f"Contains prohibited words: {', '.join(sorted(profanity.terms))}"
            else:
                reason = REASON_HIGH_TOXICITY
            return ModerationDecision("reject", reason, toxicity.value)

        if toxicity.value > self.flag_threshold:
            return ModerationDecision("flag", REASON_MODERATE_TOXICITY, toxicity.value)

        return ModerationDecision("approve", REASON_PASSED, toxicity.value)


def apply_decision(item: ContentItem, decision: ModerationDecision, now: datetime) -> None:
    """Write a decision's status and score fields onto a content item.

    approve makes the item visible, flag keeps it hidden pending review and
    reject hides it and marks it removed.
    """
    item.toxicity_score = decision.toxicity_score
    item.moderation_status = decision.status
    item.updated_at = now
    if decision.action == "approve":
        item.is_approved = True
        item.approved_at = now
    elif decision.action == "reject":
        item.is_removed = True


class ModerationService:
    """Service running the automated moderation pipeline for one submission."""

    def __init__(
        self,
        profanity_filter: ProfanityFilter | None = None,
        toxicity_model: ToxicityModel | None = None,
        decision_engine: ModerationDecisionEngine | None = None,
        audit_log: ModerationAuditLog | None = None,
    ) -> None:
        self.profanity_filter = profanity_filter or ProfanityFilter()
        self.toxicity_model = toxicity_model or HeuristicToxicityScorer()
        self.decision_engine = decision_engine or ModerationDecisionEngine()
        self.audit_log = audit_log or ModerationAuditLog()

    def evaluate(self, body: str) -> ModerationDecision:
        """Score ``body`` and decide, without touching storage."""
        profanity = self.profanity_filter.scan(body)
        toxicity = self.toxicity_model.score(body)
        return self.decision_engine.decide(profanity, toxicity)

    def moderate(
        self,
        db: Session,
        ref: ContentRef,
        body: str,
        now: datetime | None = None,
    ) -> ModerationOutcome:
        """Evaluate a submission once and persist the resulting status.

        Args:
            db: Database session
            ref: The post or comment being moderated
            body: Submitted text to evaluate
            now: Decision time, defaults to the current UTC time

        Returns:
            The decision and toxicity score. A target that already left
            ``pending`` is not re-evaluated; its stored decision is returned.

        Raises:
            ValidationError: If the body is empty or too long.
            NotFoundError: If the target does not exist.
            DependencyError: If the status could not be persisted.
        """
        if not body or not body.strip():
            raise ValidationError("Content body is required")
        if len(body) > settings.max_body_length:
            raise ValidationError("Content too long")

        repo = ContentRepository(db)
        item = repo.get_or_404(ref)

        if item.moderation_status != MODERATION_STATUS_PENDING:
            logger.info(
                "Skipping re-evaluation of %s already %s", ref, item.moderation_status
            )
            return ModerationOutcome(
                decision=STATUS_TO_ACTION[item.moderation_status],
                toxicity_score=item.toxicity_score,
                reevaluated=False,
            )

        decision = self.evaluate(body)
        now = now or utcnow()
        apply_decision(item, decision, now)
        if decision.action == "approve":
            # Newly visible items enter the feed with a fresh hot score.
            score_item(item, now)
        repo.commit(f"moderation status for {ref}")
        logger.info(
            "Moderated %s: %s (toxicity %.2f)", ref, decision.action, decision.toxicity_score
        )

        self.audit_log.record(
            db,
            AuditEntry(
                target_kind=ref.kind.value,
                target_id=ref.id,
                action=decision.action,
                reason=decision.reason,
                automated=True,
                timestamp=now,
            ),
        )
        return ModerationOutcome(
            decision=decision.action,
            toxicity_score=decision.toxicity_score,
        )
