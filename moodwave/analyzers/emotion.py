"""
Emotion mapper.

Maps acoustic features onto valence/arousal.
Based on the dimensional emotion model (Russell's circumplex).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from moodwave.analyzers.base import Analyzer, AnalysisResult
from moodwave.core.mathutils import clamp, map_range, sigmoid
from moodwave.core.state import AudioFeatures, EmotionState

if TYPE_CHECKING:
    from moodwave.core.stream import AudioFrame
    from moodwave.core.pipeline import CaptureState


VALENCE_STEEPNESS = 3.0
AROUSAL_STEEPNESS = 2.5

# Below this the pitch detector is considered silent.
PITCH_FLOOR_HZ = 50.0


def estimate_valence(features: AudioFeatures, steepness: float = VALENCE_STEEPNESS) -> float:
    """
    Valence from pitch height and spectral brightness.

    Higher, brighter voices read as more positive. An undetected pitch
    contributes nothing rather than pulling valence down.
    """
    pitch_term = 0.0
    if features.pitch > PITCH_FLOOR_HZ:
        pitch_term = map_range(features.pitch, 100, 300, -0.5, 0.5)

    brightness_term = map_range(features.spectral_centroid, 1000, 3000, -1, 1)

    raw = clamp(0.4 * pitch_term + 0.6 * brightness_term, -1.0, 1.0)
    return sigmoid(raw, steepness)


def estimate_arousal(features: AudioFeatures, steepness: float = AROUSAL_STEEPNESS) -> float:
    """
    Arousal from loudness, noisiness and pitch variance.

    Louder, noisier, more varied → higher arousal.
    """
    volume_term = map_range(features.rms, 0.02, 0.4, -1, 1)
    clarity_term = map_range(features.clarity, 0.1, 0.6, -0.5, 0.5)
    variance_term = map_range(features.pitch_variance, 0, 0.5, -0.5, 0.5)

    raw = clamp(volume_term + clarity_term + variance_term, -1.0, 1.0)
    return sigmoid(raw, steepness)


def audio_to_emotion(
    features: AudioFeatures,
    valence_steepness: float = VALENCE_STEEPNESS,
    arousal_steepness: float = AROUSAL_STEEPNESS,
) -> EmotionState:
    """Map one feature snapshot to a raw emotion estimate."""
    return EmotionState(
        valence=estimate_valence(features, valence_steepness),
        arousal=estimate_arousal(features, arousal_steepness),
    )


@dataclass
class EmotionResult(AnalysisResult):
    """Raw emotion estimate for one frame."""
    emotion: EmotionState = field(default_factory=EmotionState)
    is_active: bool = False


class EmotionAnalyzer(Analyzer):
    """
    Dimensional emotion estimator.

    Reads the feature snapshot produced earlier in the same cycle and maps
    it to arousal-valence space:

    Arousal correlates:
    - Loudness (louder = higher arousal)
    - Spectral flatness (noisier = higher arousal)
    - Zero-crossing variance (more varied = higher arousal)

    Valence correlates:
    - Pitch height (higher = more positive, generally)
    - Spectral brightness

    Both axes pass through a sigmoid so typical speech commits to a mood
    instead of hovering around neutral.

    Note: Valence is notoriously difficult to estimate from
    acoustics alone; semantic fusion exists for that reason.
    """

    def __init__(
        self,
        valence_steepness: float = VALENCE_STEEPNESS,
        arousal_steepness: float = AROUSAL_STEEPNESS,
    ) -> None:
        self._valence_steepness = valence_steepness
        self._arousal_steepness = arousal_steepness

    @property
    def name(self) -> str:
        return "emotion"

    def analyze(self, frame: AudioFrame, state: CaptureState) -> EmotionResult:
        features = state.features
        emotion = audio_to_emotion(
            features,
            self._valence_steepness,
            self._arousal_steepness,
        )

        return EmotionResult(
            analyzer_name=self.name,
            frame_id=frame.frame_id,
            timestamp_ms=frame.timestamp_ms,
            emotion=emotion,
            is_active=features.is_active,
            data={
                "valence": emotion.valence,
                "arousal": emotion.arousal,
                "quadrant": emotion.quadrant.value,
            },
        )
