"""
moodwave - Real-time audio-to-affect signal pipeline

moodwave turns microphone buffers into a smoothed valence/arousal
estimate and a visual theme. It does not capture or render anything.
"""

from moodwave.core.state import AudioFeatures, EmotionState, Quadrant, VisualTheme
from moodwave.core.stream import AudioConfig, AudioFrame
from moodwave.core.pipeline import AffectPipeline, EmotionSlot, PipelineConfig
from moodwave.analyzers.base import Analyzer
from moodwave.adapters.base import Adapter

__version__ = "0.1.0"
__all__ = [
    # Core data structures
    "AudioFeatures",
    "EmotionState",
    "Quadrant",
    "VisualTheme",
    "AudioConfig",
    "AudioFrame",
    # Pipeline
    "AffectPipeline",
    "EmotionSlot",
    "PipelineConfig",
    # Extension protocols
    "Analyzer",
    "Adapter",
]
