"""Vote ledger maintenance and net score aggregation."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from duk_scoring.core.errors import ValidationError
from duk_scoring.db.time import utcnow
from duk_scoring.models.content import ContentKind, ContentRef
from duk_scoring.models.vote import VOTE_DOWN, VOTE_UP, Vote
from duk_scoring.repositories.content_repo import ContentRepository
from duk_scoring.services.hot_score import score_item

logger = logging.getLogger(__name__)

Polarity = Literal["up", "down"]


def resolve_target(kind: str | ContentKind | None, target_id: int | None) -> ContentRef:
    """Build a :class:`ContentRef`, rejecting an absent or unknown kind."""
    if kind is None or target_id is None:
        raise ValidationError("A target kind and id are required")
    try:
        return ContentRef(kind=kind, id=target_id)
    except ValueError as exc:
        raise ValidationError(f"Unknown target kind: {kind!r}") from exc


def count_net_score(db: Session, ref: ContentRef) -> int:
    """Return ``#up - #down`` over every stored vote for ``ref``."""
    stmt = select(
        func.coalesce(
            func.sum(case((Vote.polarity == VOTE_UP, 1), (Vote.polarity == VOTE_DOWN, -1), else_=0)),
            0,
        )
    ).where(Vote.target_kind == ref.kind.value, Vote.target_id == ref.id)
    return int(db.execute(stmt).scalar_one())


class VoteAggregator:
    """Applies one voter's vote and rewrites the target's net score."""

    def apply_vote(
        self,
        db: Session,
        voter_id: str,
        target: ContentRef,
        polarity: Polarity | None,
        now: datetime | None = None,
    ) -> int:
        """Upsert or clear the voter's vote, then recount the target.

        The target row stays locked from the first read until the commit, so
        the vote mutation, recount and score writes form one unit with respect
        to other votes on the same target. The score is always recomputed
        from the full ledger, never incremented.

        Args:
            db: Database session
            voter_id: Identifier of the voter (already authenticated upstream)
            target: The post or comment voted on
            polarity: ``"up"``, ``"down"``, or ``None`` to remove the vote
            now: Reference time for the hot score refresh

        Returns:
            The freshly computed net vote score.

        Raises:
            ValidationError: If the voter or polarity is invalid.
            NotFoundError: If the target does not exist or is not visible.
            DependencyError: If the vote could not be persisted.
        """
        if not voter_id:
            raise ValidationError("A voter id is required")
        if polarity is not None and polarity not in (VOTE_UP, VOTE_DOWN):
            raise ValidationError("Invalid vote type")

        repo = ContentRepository(db)
        item = repo.lock_visible(target)

        existing = db.execute(
            select(Vote).where(
                Vote.voter_id == voter_id,
                Vote.target_kind == target.kind.value,
                Vote.target_id == target.id,
            )
        ).scalars().first()

        if polarity is None:
            if existing is not None:
                db.delete(existing)
        elif existing is not None:
            existing.polarity = polarity
        else:
            db.add(
                Vote(
                    voter_id=voter_id,
                    target_kind=target.kind.value,
                    target_id=target.id,
                    polarity=polarity,
                )
            )
        repo.flush(f"vote on {target}")

        now = now or utcnow()
        item.vote_score = count_net_score(db, target)
        score_item(item, now)
        repo.touch(item, now)
        net_score = item.vote_score
        repo.commit(f"vote on {target}")

        logger.debug("Voter %s set %s on %s; net score %d", voter_id, polarity, target, net_score)
        return net_score

    @staticmethod
    def get_vote(db: Session, voter_id: str, target: ContentRef) -> str | None:
        """Return the voter's current polarity on ``target``, if any."""
        return db.execute(
            select(Vote.polarity).where(
                Vote.voter_id == voter_id,
                Vote.target_kind == target.kind.value,
                Vote.target_id == target.id,
            )
        ).scalar_one_or_none()
