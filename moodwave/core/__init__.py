"""Core data structures and pipeline."""

from moodwave.core.state import AudioFeatures, EmotionState, Quadrant, VisualTheme
from moodwave.core.stream import AudioConfig, AudioFrame, compute_spectrum_db
from moodwave.core.pipeline import AffectPipeline, CaptureState, EmotionSlot, PipelineConfig

__all__ = [
    "AudioFeatures",
    "EmotionState",
    "Quadrant",
    "VisualTheme",
    "AudioConfig",
    "AudioFrame",
    "compute_spectrum_db",
    "AffectPipeline",
    "CaptureState",
    "EmotionSlot",
    "PipelineConfig",
]
