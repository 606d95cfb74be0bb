"""
Value objects passed between pipeline stages.

Every object here is immutable. Stages hand each other whole snapshots,
never partially updated records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Iterable


class Quadrant(str, Enum):
    """Named regions of the valence/arousal plane."""
    MELANCHOLIC = "melancholic"
    CALM = "calm"
    ANXIOUS = "anxious"
    JOYFUL = "joyful"


def _bounded(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(-1.0, min(1.0, value))


@dataclass(frozen=True, slots=True)
class EmotionState:
    """
    Point in the circumplex affect plane.

    - valence: negative (-1.0) ↔ positive (1.0)
    - arousal: low energy (-1.0) ↔ high energy (1.0)

    Out-of-range values are clamped on construction, NaN becomes 0.
    """
    valence: float = 0.0
    arousal: float = 0.0

    def __post_init__(self) -> None:
        if not (-1.0 <= self.valence <= 1.0):
            object.__setattr__(self, 'valence', _bounded(float(self.valence)))
        if not (-1.0 <= self.arousal <= 1.0):
            object.__setattr__(self, 'arousal', _bounded(float(self.arousal)))

    @property
    def quadrant(self) -> Quadrant:
        """Return the quadrant this state falls in (zero counts as positive)."""
        if self.arousal >= 0:
            return Quadrant.JOYFUL if self.valence >= 0 else Quadrant.ANXIOUS
        return Quadrant.CALM if self.valence >= 0 else Quadrant.MELANCHOLIC

    def as_tuple(self) -> tuple[float, float]:
        return (self.valence, self.arousal)


@dataclass(frozen=True, slots=True)
class AudioFeatures:
    """
    Acoustic features of one capture buffer.

    Attributes:
        rms: Scaled loudness, 0-1
        spectral_centroid: Magnitude-weighted mean frequency in Hz
        pitch_variance: Zero-crossing based variance proxy, 0-1
        pitch: Fundamental frequency in Hz, 0 when undetected
        clarity: Spectral flatness, 0 (tonal) to 1 (noise-like)
        is_active: Whether the buffer carries meaningful signal
    """
    rms: float = 0.0
    spectral_centroid: float = 0.0
    pitch_variance: float = 0.0
    pitch: float = 0.0
    clarity: float = 0.0
    is_active: bool = False


@dataclass(frozen=True, slots=True)
class VisualTheme:
    """
    Visual parameters handed to the renderer once per tick.

    Colours are HSL so they blend component-wise.
    """
    primary_hue: float
    primary_saturation: float
    primary_lightness: float
    secondary_hue: float
    secondary_saturation: float
    secondary_lightness: float
    blur_amount: float
    opacity: float
    animation_speed: float
    scale_range: float
    drift_amount: float

    def as_tuple(self) -> tuple[float, ...]:
        """Field values in declaration order."""
        return tuple(getattr(self, name) for name in THEME_FIELDS)

    @classmethod
    def from_values(cls, values: Iterable[float]) -> VisualTheme:
        """Build a theme from values in declaration order."""
        return cls(*(float(v) for v in values))


THEME_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(VisualTheme))
HUE_FIELDS: frozenset[str] = frozenset({"primary_hue", "secondary_hue"})
