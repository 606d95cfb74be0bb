"""
Audio stream abstractions.

A capture buffer arrives as a pair: the time-domain samples and the decibel
magnitude spectrum of the same window, as an analyser node would report them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol, runtime_checkable
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class AudioConfig:
    """Audio stream configuration."""
    sample_rate: int = 44100
    fft_size: int = 2048

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.fft_size < 2:
            raise ValueError(f"fft_size must be at least 2, got {self.fft_size}")

    @property
    def frame_size(self) -> int:
        """Samples per capture buffer."""
        return self.fft_size

    @property
    def frequency_bin_count(self) -> int:
        """Bins in the magnitude spectrum."""
        return self.fft_size // 2

    @property
    def frame_duration_ms(self) -> float:
        """Capture period for one buffer."""
        return self.fft_size / self.sample_rate * 1000


def compute_spectrum_db(
    samples: NDArray[np.float32],
    fft_size: int,
) -> NDArray[np.float32]:
    """
    Decibel magnitude spectrum of one buffer.

    Blackman window, real FFT, magnitude scaled by 1/fft_size, first
    fft_size/2 bins. Silent bins come out as -inf.
    """
    frame = np.zeros(fft_size, dtype=np.float64)
    n = min(len(samples), fft_size)
    frame[:n] = samples[:n]

    window = np.blackman(fft_size)
    spectrum = np.abs(np.fft.rfft(frame * window))[: fft_size // 2] / fft_size

    with np.errstate(divide='ignore'):
        db = 20 * np.log10(spectrum)
    return db.astype(np.float32)


@dataclass(slots=True)
class AudioFrame:
    """
    Single capture buffer.

    Attributes:
        samples: Time-domain samples as float32, normalized to [-1.0, 1.0]
        spectrum_db: Magnitude spectrum in decibels, config.frequency_bin_count bins
        frame_id: Monotonically increasing frame identifier
        timestamp_ms: Timestamp in milliseconds from stream start
        config: Audio configuration
    """
    samples: NDArray[np.float32]
    spectrum_db: NDArray[np.float32]
    frame_id: int
    timestamp_ms: int
    config: AudioConfig

    @property
    def sample_rate(self) -> int:
        return self.config.sample_rate

    @classmethod
    def from_samples(
        cls,
        samples: NDArray[np.float32],
        frame_id: int,
        timestamp_ms: int,
        config: AudioConfig,
    ) -> AudioFrame:
        """Create a frame, computing its spectrum from the samples."""
        data = np.asarray(samples, dtype=np.float32)
        return cls(
            samples=data,
            spectrum_db=compute_spectrum_db(data, config.fft_size),
            frame_id=frame_id,
            timestamp_ms=timestamp_ms,
            config=config,
        )

    @classmethod
    def silence(cls, frame_id: int, timestamp_ms: int, config: AudioConfig) -> AudioFrame:
        """Create a silent frame."""
        return cls(
            samples=np.zeros(config.frame_size, dtype=np.float32),
            spectrum_db=np.full(config.frequency_bin_count, -np.inf, dtype=np.float32),
            frame_id=frame_id,
            timestamp_ms=timestamp_ms,
            config=config,
        )


@runtime_checkable
class AudioSource(Protocol):
    """Protocol for audio sources."""

    @property
    def config(self) -> AudioConfig:
        """Return audio configuration."""
        ...

    def frames(self) -> Iterator[AudioFrame]:
        """Yield audio frames."""
        ...

    def close(self) -> None:
        """Close the source."""
        ...
