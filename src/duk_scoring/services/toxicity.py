"""Toxicity scoring for submitted text.

The production path uses :class:`HeuristicToxicityScorer`, a deterministic
pattern-based stand-in for a trained classifier. Anything implementing
:class:`ToxicityModel` can replace it; the heuristic scorer then stays available
as the reproducible fallback that tests pin exact values against.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from duk_scoring.core.settings import settings

DEFAULT_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Hate / threat vocabulary
    re.compile(r"\b(hate|attack|threat|violence)\b", re.IGNORECASE),
    # Shouting
    re.compile(r"[A-Z]{10,}"),
    # Long runs of one character
    re.compile(r"(.)\1{4,}"),
    # Phone-number-like digit runs
    re.compile(r"\b\d{10,}\b"),
    # Embedded links
    re.compile(r"https?://\S+"),
)


@dataclass(frozen=True)
class ToxicityResult:
    """Bounded severity value and the derived toxic flag."""

    value: float
    toxic: bool


@runtime_checkable
class ToxicityModel(Protocol):
    """Capability interface for anything that can score text toxicity."""

    def score(self, text: str) -> ToxicityResult:
        """Return a severity value in ``[0, 1]`` for ``text``."""
        ...


class HeuristicToxicityScorer:
    """Sum fixed increments for each suspicious pattern found in the text.

    Args:
        patterns: Compiled patterns; each one that matches adds ``pattern_weight``.
        pattern_weight: Increment per triggered pattern.
        length_weight: Increment for text shorter than ``min_length`` or longer
            than ``max_length``.
        toxic_threshold: ``toxic`` is set when the value is strictly above this.
    """

    def __init__(
        self,
        patterns: Sequence[re.Pattern[str]] = DEFAULT_PATTERNS,
        *,
        pattern_weight: float | None = None,
        length_weight: float | None = None,
        min_length: int | None = None,
        max_length: int | None = None,
        toxic_threshold: float | None = None,
    ) -> None:
        self.patterns = tuple(patterns)
        self.pattern_weight = (
            settings.toxicity_pattern_weight if pattern_weight is None else pattern_weight
        )
        self.length_weight = (
            settings.toxicity_length_weight if length_weight is None else length_weight
        )
        self.min_length = settings.toxicity_min_length if min_length is None else min_length
        self.max_length = settings.toxicity_max_length if max_length is None else max_length
        self.toxic_threshold = (
            settings.toxicity_toxic_threshold if toxic_threshold is None else toxic_threshold
        )

    def triggered(self, text: str) -> list[re.Pattern[str]]:
        """Return the patterns that match ``text``."""
        return [pattern for pattern in self.patterns if pattern.search(text)]

    def score(self, text: str) -> ToxicityResult:
        text = text or ""
        raw = self.pattern_weight * len(self.triggered(text))
        if len(text) < self.min_length:
            raw += self.length_weight
        if len(text) > self.max_length:
            raw += self.length_weight

        value = round(min(max(raw, 0.0), 1.0), 2)
        return ToxicityResult(value=value, toxic=value > self.toxic_threshold)
