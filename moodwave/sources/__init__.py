"""Synthetic audio sources for the moodwave pipeline."""

from moodwave.sources.synthetic import ArraySource, SineSource, NoiseSource, SilenceSource

__all__ = [
    "ArraySource",
    "SineSource",
    "NoiseSource",
    "SilenceSource",
]
