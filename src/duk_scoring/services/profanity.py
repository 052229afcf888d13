"""Keyword denylist pass over raw submission text."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from duk_scoring.core.settings import settings


@dataclass(frozen=True)
class ProfanityResult:
    """Outcome of a denylist scan."""

    matched: bool
    terms: frozenset[str]


class ProfanityFilter:
    """Case-insensitive substring match against a fixed denylist."""

    def __init__(self, denylist: Iterable[str] | None = None) -> None:
        terms = settings.profanity_denylist if denylist is None else denylist
        self.denylist: tuple[str, ...] = tuple(
            term.strip().lower() for term in terms if term.strip()
        )

    def scan(self, text: str) -> ProfanityResult:
        """Return which denylisted terms appear anywhere in ``text``."""
        lowered = (text or "").lower()
        found = frozenset(term for term in self.denylist if term in lowered)
        return ProfanityResult(matched=bool(found), terms=found)
