"""Append-only audit trail of moderation decisions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from duk_scoring.core.errors import DependencyError
from duk_scoring.db.time import utcnow
from duk_scoring.models.content import ContentRef
from duk_scoring.models.moderation import SYSTEM_MODERATOR_ID, ModerationLog
from duk_scoring.services.side_channel import run_best_effort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditEntry:
    """Immutable description of one moderation action."""

    target_kind: str
    target_id: int
    action: str
    reason: str
    automated: bool = True
    moderator_id: str = SYSTEM_MODERATOR_ID
    timestamp: datetime = field(default_factory=utcnow)


class AuditSink(Protocol):
    """Destination for audit entries."""

    def append(self, session: Session, entry: AuditEntry) -> None:
        """Persist ``entry`` or raise :class:`DependencyError`."""
        ...


class DatabaseAuditSink:
    """Stores audit entries as ``moderation_log`` rows."""

    def append(self, session: Session, entry: AuditEntry) -> None:
        session.add(
            ModerationLog(
                moderator_id=entry.moderator_id,
                target_type=entry.target_kind,
                target_id=entry.target_id,
                action=entry.action,
                reason=entry.reason,
                automated=entry.automated,
                created_at=entry.timestamp,
            )
        )
        try:
            session.flush()
        except SQLAlchemyError as exc:
            raise DependencyError("Audit sink rejected entry") from exc


class ModerationAuditLog:
    """Best-effort recorder wrapping an :class:`AuditSink`.

    Recording never raises: a failing sink is logged and the entry dropped.
    """

    def __init__(self, sink: AuditSink | None = None) -> None:
        self.sink = sink or DatabaseAuditSink()

    def record(self, session: Session, entry: AuditEntry) -> bool:
        """Append ``entry`` after the caller's primary commit.

        Returns:
            True if the entry was stored.
        """
        def _append(sess: Session) -> bool:
            self.sink.append(sess, entry)
            return True

        stored = run_best_effort(
            session,
            f"audit entry for {entry.target_kind}:{entry.target_id}",
            _append,
        )
        return bool(stored)

    @staticmethod
    def entries_for(session: Session, ref: ContentRef) -> list[ModerationLog]:
        """Return the audit trail of one content item, oldest first."""
        stmt = (
            select(ModerationLog)
            .where(
                ModerationLog.target_type == ref.kind.value,
                ModerationLog.target_id == ref.id,
            )
            .order_by(ModerationLog.created_at, ModerationLog.id)
        )
        return list(session.execute(stmt).scalars())
