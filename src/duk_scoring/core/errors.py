"""Error types raised by the scoring engine.

Services raise these; the API layer maps them onto HTTP responses.
"""

from __future__ import annotations


class ScoringError(RuntimeError):
    """Base exception for all engine failures."""

    status_code = 500


class ValidationError(ScoringError):
    """Raised for missing or malformed input before any side effect happens."""

    status_code = 422


class NotFoundError(ScoringError):
    """Raised when the target content does not exist or is not visible."""

    status_code = 404


class DependencyError(ScoringError):
    """Raised when the content store or another collaborator call fails.

    Primary effects (status or score persistence) surface this to the caller so
    the request can be retried. Best-effort side channels log and drop it.
    """

    status_code = 503
