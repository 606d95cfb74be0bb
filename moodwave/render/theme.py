"""
Emotion → visual theme interpolation.

Four fixed presets sit on the corners of the valence/arousal square:

    anxious  (v-, a+)  ───  joyful (v+, a+)
        │                       │
    melancholic (v-, a-) ── calm (v+, a-)

Any other point is a bilinear blend of the four, field by field.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from moodwave.core.mathutils import clamp, lerp, lerp_hue
from moodwave.core.state import (
    EmotionState,
    HUE_FIELDS,
    Quadrant,
    THEME_FIELDS,
    VisualTheme,
)


MELANCHOLIC = VisualTheme(
    primary_hue=210.0,  # deep blue
    primary_saturation=100.0,
    primary_lightness=8.0,
    secondary_hue=220.0,
    secondary_saturation=80.0,
    secondary_lightness=20.0,
    blur_amount=60.0,
    opacity=0.9,
    animation_speed=0.1,
    scale_range=0.1,
    drift_amount=20.0,
)

CALM = VisualTheme(
    primary_hue=180.0,  # teal
    primary_saturation=60.0,
    primary_lightness=25.0,
    secondary_hue=160.0,
    secondary_saturation=50.0,
    secondary_lightness=35.0,
    blur_amount=45.0,
    opacity=0.7,
    animation_speed=0.25,
    scale_range=0.15,
    drift_amount=30.0,
)

ANXIOUS = VisualTheme(
    primary_hue=15.0,  # red-orange
    primary_saturation=90.0,
    primary_lightness=30.0,
    secondary_hue=0.0,
    secondary_saturation=85.0,
    secondary_lightness=25.0,
    blur_amount=8.0,
    opacity=0.95,
    animation_speed=0.9,
    scale_range=0.3,
    drift_amount=80.0,
)

JOYFUL = VisualTheme(
    primary_hue=45.0,  # gold
    primary_saturation=85.0,
    primary_lightness=50.0,
    secondary_hue=35.0,
    secondary_saturation=90.0,
    secondary_lightness=45.0,
    blur_amount=15.0,
    opacity=0.8,
    animation_speed=0.75,
    scale_range=0.25,
    drift_amount=60.0,
)

PRESETS: Mapping[Quadrant, VisualTheme] = MappingProxyType({
    Quadrant.MELANCHOLIC: MELANCHOLIC,
    Quadrant.CALM: CALM,
    Quadrant.ANXIOUS: ANXIOUS,
    Quadrant.JOYFUL: JOYFUL,
})


def blend_weights(emotion: EmotionState) -> tuple[float, float]:
    """Position of the state inside the unit square, (valence, arousal)."""
    v_pos = clamp((emotion.valence + 1) / 2, 0.0, 1.0)
    a_pos = clamp((emotion.arousal + 1) / 2, 0.0, 1.0)
    return v_pos, a_pos


def interpolate_theme(emotion: EmotionState, circular_hue: bool = False) -> VisualTheme:
    """
    Bilinear blend of the four presets.

    Hues are blended linearly by default, which takes the long way round
    when two hues straddle 0°/360°. Pass circular_hue=True for
    shortest-arc hue blending.
    """
    v_pos, a_pos = blend_weights(emotion)

    values = []
    for name in THEME_FIELDS:
        bl = getattr(MELANCHOLIC, name)
        br = getattr(CALM, name)
        tl = getattr(ANXIOUS, name)
        tr = getattr(JOYFUL, name)

        blend = lerp_hue if circular_hue and name in HUE_FIELDS else lerp
        bottom = blend(bl, br, v_pos)
        top = blend(tl, tr, v_pos)
        values.append(blend(bottom, top, a_pos))

    return VisualTheme.from_values(values)


def nearest_preset(theme: VisualTheme) -> Quadrant:
    """Quadrant whose preset is closest to theme, each field scaled by its preset spread."""
    spans = []
    for name in THEME_FIELDS:
        corner_values = [getattr(p, name) for p in PRESETS.values()]
        spans.append(max(corner_values) - min(corner_values) or 1.0)

    def distance(preset: VisualTheme) -> float:
        return sum(
            ((a - b) / span) ** 2
            for a, b, span in zip(theme.as_tuple(), preset.as_tuple(), spans)
        )

    return min(PRESETS, key=lambda q: distance(PRESETS[q]))


class ThemeInterpolator:
    """Callable wrapper around interpolate_theme holding the hue mode."""

    def __init__(self, circular_hue: bool = False) -> None:
        self._circular_hue = circular_hue

    @property
    def circular_hue(self) -> bool:
        return self._circular_hue

    def __call__(self, emotion: EmotionState) -> VisualTheme:
        return interpolate_theme(emotion, self._circular_hue)
