"""Dispatch helper for best-effort work that runs after a primary commit."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_best_effort(
    session: Session,
    description: str,
    operation: Callable[[Session], T],
) -> T | None:
    """Run ``operation`` inside its own savepoint and commit it.

    Must be called after the primary transaction has been committed. Failures
    are logged and dropped so they can never change the primary result.

    Returns:
        The operation's return value, or ``None`` when it failed.
    """
    try:
        # The savepoint is rolled back on error; committed primary work is untouched.
        with session.begin_nested():
            result = operation(session)
    except Exception as exc:  # noqa: BLE001 - sinks are pluggable and may raise anything
        logger.warning("Best-effort %s failed: %s", description, exc, exc_info=True)
        session.rollback()
        return None

    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning("Best-effort %s could not be committed: %s", description, exc)
        return None
    return result
