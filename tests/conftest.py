"""Shared fixtures for moodwave tests."""

import numpy as np
import pytest

from moodwave.core.stream import AudioConfig


@pytest.fixture
def audio_config():
    return AudioConfig(sample_rate=44100, fft_size=2048)


@pytest.fixture
def make_sine(audio_config):
    """Factory for one capture buffer of a pure tone."""
    def _make(frequency_hz: float, amplitude: float = 0.5, size: int | None = None):
        n = size or audio_config.frame_size
        t = np.arange(n) / audio_config.sample_rate
        return (amplitude * np.sin(2 * np.pi * frequency_hz * t)).astype(np.float32)
    return _make
