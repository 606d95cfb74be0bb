"""Per-tick exponential smoothing of the displayed emotion."""

from __future__ import annotations

import math

from moodwave.core.mathutils import exponential_smooth
from moodwave.core.state import EmotionState

DEFAULT_EMOTION = EmotionState(valence=-0.5, arousal=-0.5)
NOMINAL_TICK_MS = 1000 / 60


class TemporalSmoother:
    """
    First-order exponential smoother.

    Runs on every render tick, including ticks where the target has not
    changed, so the displayed state keeps converging on the last target.
    Each step is a convex combination of current and target, so it never
    overshoots.
    """

    def __init__(
        self,
        alpha: float = 0.15,
        initial: EmotionState = DEFAULT_EMOTION,
        nominal_tick_ms: float = NOMINAL_TICK_MS,
    ) -> None:
        self._alpha = alpha
        self._initial = initial
        self._nominal_tick_ms = nominal_tick_ms
        self._current = initial

    @property
    def current(self) -> EmotionState:
        return self._current

    @property
    def alpha(self) -> float:
        return self._alpha

    def step_alpha(self, delta_ms: float | None = None) -> float:
        """
        Smoothing factor for one tick.

        With no usable delta (None, non-finite or non-positive) every tick
        uses alpha. Otherwise the factor is rescaled so that convergence
        speed does not depend on frame rate.
        """
        if delta_ms is None or not math.isfinite(delta_ms) or delta_ms <= 0:
            return self._alpha
        ticks = delta_ms / self._nominal_tick_ms
        return 1.0 - (1.0 - self._alpha) ** ticks

    def step(self, target: EmotionState, delta_ms: float | None = None) -> EmotionState:
        """Advance one tick toward target and return the new state."""
        alpha = self.step_alpha(delta_ms)
        self._current = EmotionState(
            valence=exponential_smooth(self._current.valence, target.valence, alpha),
            arousal=exponential_smooth(self._current.arousal, target.arousal, alpha),
        )
        return self._current

    def reset(self, state: EmotionState | None = None) -> None:
        self._current = state if state is not None else self._initial
