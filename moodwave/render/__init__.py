"""Render-cadence stages: smoothing and theme interpolation."""

from moodwave.render.smoother import TemporalSmoother, DEFAULT_EMOTION
from moodwave.render.theme import (
    PRESETS,
    ThemeInterpolator,
    interpolate_theme,
    nearest_preset,
)

__all__ = [
    "TemporalSmoother",
    "DEFAULT_EMOTION",
    "PRESETS",
    "ThemeInterpolator",
    "interpolate_theme",
    "nearest_preset",
]
