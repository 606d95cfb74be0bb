"""Capture-cadence analyzers: feature extraction and emotion mapping."""

from moodwave.analyzers.base import Analyzer, AnalysisResult
from moodwave.analyzers.features import (
    FeatureAnalyzer,
    FeatureResult,
    brightness,
    detect_pitch,
    extract_features,
    flatness,
    is_active,
    loudness,
    pitch_variance_proxy,
)
from moodwave.analyzers.emotion import (
    EmotionAnalyzer,
    EmotionResult,
    audio_to_emotion,
    estimate_arousal,
    estimate_valence,
)

__all__ = [
    "Analyzer",
    "AnalysisResult",
    "FeatureAnalyzer",
    "FeatureResult",
    "brightness",
    "detect_pitch",
    "extract_features",
    "flatness",
    "is_active",
    "loudness",
    "pitch_variance_proxy",
    "EmotionAnalyzer",
    "EmotionResult",
    "audio_to_emotion",
    "estimate_arousal",
    "estimate_valence",
]
