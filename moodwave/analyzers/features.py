"""
Acoustic feature extraction.

Pure functions over a time-domain buffer and its decibel magnitude
spectrum. Every function is defined for empty and silent input and never
returns NaN or infinity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from moodwave.analyzers.base import Analyzer, AnalysisResult
from moodwave.core.state import AudioFeatures

if TYPE_CHECKING:
    from moodwave.core.stream import AudioFrame
    from moodwave.core.pipeline import CaptureState


LOUDNESS_GAIN = 3.0
ZERO_CROSSING_CEILING = 200.0
FLATNESS_SKIP_BINS = 5
FLATNESS_FLOOR_DB = -100.0
PITCH_MIN_RMS = 0.01
PITCH_MIN_CORRELATION = 0.5
ACTIVITY_THRESHOLD = 0.02


def _as_array(data) -> NDArray[np.float64]:
    return np.asarray(data, dtype=np.float64).ravel()


def _db_to_magnitude(magnitude_db) -> NDArray[np.float64]:
    """Linear magnitudes; non-finite bins count as silent."""
    db = _as_array(magnitude_db)
    finite = np.isfinite(db)
    mags = np.zeros_like(db)
    mags[finite] = np.power(10.0, db[finite] / 20.0)
    return mags


def loudness(samples) -> float:
    """
    Scaled RMS loudness in [0, 1].

    Typical speech RMS sits around 0.01-0.3; the gain of 3 spreads that
    over the usable output range.
    """
    data = _as_array(samples)
    if len(data) == 0:
        return 0.0
    rms = float(np.sqrt(np.mean(data ** 2)))
    return min(rms * LOUDNESS_GAIN, 1.0)


def brightness(magnitude_db, sample_rate: int) -> float:
    """Spectral centroid in Hz; 0 for an empty or silent spectrum."""
    mags = _db_to_magnitude(magnitude_db)
    if len(mags) == 0:
        return 0.0

    bin_width = (sample_rate / 2) / len(mags)
    frequencies = np.arange(len(mags)) * bin_width

    total = float(np.sum(mags))
    if total == 0 or not np.isfinite(total):
        return 0.0
    return float(np.sum(mags * frequencies) / total)


def pitch_variance_proxy(samples) -> float:
    """
    Zero-crossing count normalized by 200 crossings per buffer.

    A zero sample counts as non-negative.
    """
    data = _as_array(samples)
    if len(data) < 2:
        return 0.0
    negative = data < 0
    crossings = int(np.count_nonzero(negative[1:] != negative[:-1]))
    return min(crossings / ZERO_CROSSING_CEILING, 1.0)


def flatness(magnitude_db) -> float:
    """
    Spectral flatness: geometric over arithmetic mean of bin magnitudes.

    DC/near-DC bins and bins below -100 dB are ignored. Tends to 1 for
    noise, 0 for a pure tone.
    """
    db = _as_array(magnitude_db)[FLATNESS_SKIP_BINS:]
    db = db[np.isfinite(db) & (db >= FLATNESS_FLOOR_DB)]
    if len(db) == 0:
        return 0.0

    mags = np.power(10.0, db / 20.0)
    arithmetic_mean = float(np.mean(mags))
    if arithmetic_mean == 0:
        return 0.0
    # log(10**(db/20)) == db * ln(10) / 20
    geometric_mean = float(np.exp(np.mean(db) * np.log(10.0) / 20.0))
    return float(min(geometric_mean / arithmetic_mean, 1.0))


def detect_pitch(
    samples,
    sample_rate: int,
    min_hz: float = 60.0,
    max_hz: float = 1000.0,
) -> float:
    """
    Estimate fundamental frequency using autocorrelation.

    Searches integer lags covering [min_hz, max_hz] for the largest
    unnormalized correlation and accepts it only when it exceeds half the
    buffer energy. Returns 0 when the buffer is too quiet, too short for
    the lowest pitch, or not periodic enough.
    """
    data = _as_array(samples)
    size = len(data)
    if size == 0:
        return 0.0

    energy = float(np.dot(data, data))
    if np.sqrt(energy / size) < PITCH_MIN_RMS:
        return 0.0

    min_lag = max(1, int(sample_rate / max_hz))
    max_lag = int(sample_rate / min_hz)
    if max_lag > size or min_lag > max_lag:
        return 0.0

    autocorr = np.correlate(data, data, mode='full')[size - 1:]
    search_region = autocorr[min_lag:max_lag + 1]
    if len(search_region) == 0:
        return 0.0

    best_lag = int(np.argmax(search_region)) + min_lag
    best_correlation = float(autocorr[best_lag])

    if best_correlation > PITCH_MIN_CORRELATION * energy:
        return float(sample_rate / best_lag)
    return 0.0


def is_active(loudness_value: float, threshold: float = ACTIVITY_THRESHOLD) -> bool:
    """True iff loudness exceeds the noise-floor threshold."""
    return loudness_value > threshold


def extract_features(
    samples,
    magnitude_db,
    sample_rate: int,
    activity_threshold: float = ACTIVITY_THRESHOLD,
    min_pitch_hz: float = 60.0,
    max_pitch_hz: float = 1000.0,
) -> AudioFeatures:
    """Compute the full feature snapshot for one buffer."""
    rms = loudness(samples)
    return AudioFeatures(
        rms=rms,
        spectral_centroid=brightness(magnitude_db, sample_rate),
        pitch_variance=pitch_variance_proxy(samples),
        pitch=detect_pitch(samples, sample_rate, min_pitch_hz, max_pitch_hz),
        clarity=flatness(magnitude_db),
        is_active=is_active(rms, activity_threshold),
    )


@dataclass
class FeatureResult(AnalysisResult):
    """Feature extraction result."""
    features: AudioFeatures = field(default_factory=AudioFeatures)


class FeatureAnalyzer(Analyzer):
    """
    Runs the feature extractors over one capture buffer.

    Extracts:
    - Loudness (scaled RMS) and the activity gate
    - Brightness (spectral centroid)
    - Pitch (autocorrelation F0)
    - Clarity (spectral flatness)
    - Pitch variance proxy (zero-crossing rate)
    """

    def __init__(
        self,
        activity_threshold: float = ACTIVITY_THRESHOLD,
        min_pitch_hz: float = 60.0,
        max_pitch_hz: float = 1000.0,
    ) -> None:
        self._activity_threshold = activity_threshold
        self._min_pitch_hz = min_pitch_hz
        self._max_pitch_hz = max_pitch_hz

    @property
    def name(self) -> str:
        return "features"

    def analyze(self, frame: AudioFrame, state: CaptureState) -> FeatureResult:
        features = extract_features(
            frame.samples,
            frame.spectrum_db,
            frame.sample_rate,
            activity_threshold=self._activity_threshold,
            min_pitch_hz=self._min_pitch_hz,
            max_pitch_hz=self._max_pitch_hz,
        )

        return FeatureResult(
            analyzer_name=self.name,
            frame_id=frame.frame_id,
            timestamp_ms=frame.timestamp_ms,
            features=features,
            data={
                "rms": features.rms,
                "spectral_centroid": features.spectral_centroid,
                "pitch_variance": features.pitch_variance,
                "pitch": features.pitch,
                "clarity": features.clarity,
                "is_active": features.is_active,
            },
        )
