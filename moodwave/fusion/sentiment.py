"""
Semantic sentiment fusion.

Blends the valence of recognized speech into the acoustic estimate.
Text carries mood polarity but not vocal energy, so arousal stays acoustic.
"""

from __future__ import annotations

import logging
import math
from typing import Protocol, runtime_checkable

from moodwave.core.mathutils import clamp
from moodwave.core.state import EmotionState

logger = logging.getLogger(__name__)


@runtime_checkable
class SentimentScorer(Protocol):
    """Scores a transcript segment, roughly in [-5, 5]."""

    def score(self, text: str) -> float:
        ...


class SentimentFusion:
    """
    Sticky semantic valence.

    The last non-zero normalized score is kept until another non-zero
    score replaces it. A zero score (neutral or empty text) leaves it
    untouched; there is no decay toward neutral.

    Usage:
        fusion = SentimentFusion()
        fusion.observe(2.4)
        fused = fusion.fuse(acoustic)
    """

    def __init__(
        self,
        scale: float = 3.0,
        semantic_weight: float = 0.6,
    ) -> None:
        self._scale = scale
        self._semantic_weight = semantic_weight
        self._signal: float = 0.0

    @property
    def signal(self) -> float:
        """Current semantic valence, 0 when none has been observed."""
        return self._signal

    def normalize(self, raw_score: float) -> float:
        return clamp(raw_score / self._scale, -1.0, 1.0)

    def observe(self, raw_score: float) -> float:
        """Record a semantic score. Returns the signal after the update."""
        if not math.isfinite(raw_score):
            logger.warning(f"Ignoring non-finite sentiment score {raw_score!r}")
            return self._signal

        normalized = self.normalize(raw_score)
        if normalized != 0:
            self._signal = normalized
            logger.debug(f"Semantic valence set to {normalized:.3f}")
        return self._signal

    def fuse(
        self,
        acoustic: EmotionState,
        semantic_score: float | None = None,
    ) -> EmotionState:
        """
        Fuse an acoustic estimate with the semantic signal.

        Args:
            acoustic: Raw estimate from the emotion mapper
            semantic_score: New raw score from the scorer, if one arrived

        Returns:
            New EmotionState; arousal is passed through
        """
        if semantic_score is not None:
            self.observe(semantic_score)

        if self._signal == 0:
            return acoustic

        valence = (
            acoustic.valence * (1 - self._semantic_weight) +
            self._signal * self._semantic_weight
        )
        return EmotionState(valence=clamp(valence, -1.0, 1.0), arousal=acoustic.arousal)

    def reset(self) -> None:
        self._signal = 0.0
