"""
Synthetic audio sources.

Stand-ins for the capture collaborator: each frame carries its samples
and the decibel spectrum of the same window.
"""

from __future__ import annotations

from typing import Iterator
import numpy as np

from moodwave.core.stream import AudioConfig, AudioFrame, AudioSource


class ArraySource(AudioSource):
    """
    Audio source from numpy array.

    Splits the array into back-to-back buffers of config.frame_size
    samples; a trailing partial buffer is dropped.
    """

    def __init__(
        self,
        data: np.ndarray,
        config: AudioConfig | None = None,
    ) -> None:
        self._config = config or AudioConfig()

        if data.dtype != np.float32:
            data = data.astype(np.float32)

        if len(data) and (data.max() > 1.0 or data.min() < -1.0):
            max_val = max(abs(data.max()), abs(data.min()))
            if max_val > 0:
                data = data / max_val

        self._data = data
        self._position = 0
        self._frame_id = 0
        self._closed = False

    @property
    def config(self) -> AudioConfig:
        return self._config

    def frames(self) -> Iterator[AudioFrame]:
        frame_size = self._config.frame_size

        while self._position + frame_size <= len(self._data) and not self._closed:
            frame_data = self._data[self._position:self._position + frame_size]
            timestamp_ms = int(self._position / self._config.sample_rate * 1000)

            yield AudioFrame.from_samples(
                frame_data,
                frame_id=self._frame_id,
                timestamp_ms=timestamp_ms,
                config=self._config,
            )

            self._position += frame_size
            self._frame_id += 1

    def close(self) -> None:
        self._closed = True

    def reset(self) -> None:
        """Reset to beginning."""
        self._position = 0
        self._frame_id = 0
        self._closed = False


class SineSource(ArraySource):
    """Generate a sine wave."""

    def __init__(
        self,
        frequency_hz: float = 220.0,
        duration_ms: int = 1000,
        amplitude: float = 0.5,
        config: AudioConfig | None = None,
    ) -> None:
        config = config or AudioConfig()
        total_samples = int(config.sample_rate * duration_ms / 1000)
        t = np.arange(total_samples) / config.sample_rate
        data = (amplitude * np.sin(2 * np.pi * frequency_hz * t)).astype(np.float32)
        super().__init__(data, config)


class NoiseSource(ArraySource):
    """Generate white noise."""

    def __init__(
        self,
        duration_ms: int = 1000,
        amplitude: float = 0.1,
        config: AudioConfig | None = None,
        seed: int | None = None,
    ) -> None:
        config = config or AudioConfig()
        rng = np.random.default_rng(seed)
        total_samples = int(config.sample_rate * duration_ms / 1000)
        data = (amplitude * rng.standard_normal(total_samples)).astype(np.float32)
        data = np.clip(data, -1.0, 1.0)
        super().__init__(data, config)


class SilenceSource(ArraySource):
    """Generate silence."""

    def __init__(
        self,
        duration_ms: int = 1000,
        config: AudioConfig | None = None,
    ) -> None:
        config = config or AudioConfig()
        total_samples = int(config.sample_rate * duration_ms / 1000)
        super().__init__(np.zeros(total_samples, dtype=np.float32), config)
