"""Tests for feature extraction."""

import numpy as np
import pytest

from moodwave.analyzers.features import (
    FeatureAnalyzer,
    brightness,
    detect_pitch,
    extract_features,
    flatness,
    is_active,
    loudness,
    pitch_variance_proxy,
)
from moodwave.benchmark import LatencyTracker
from moodwave.core.pipeline import CaptureState
from moodwave.core.stream import AudioFrame, compute_spectrum_db


class TestLoudness:
    def test_silence(self):
        assert loudness(np.zeros(2048, dtype=np.float32)) == 0.0

    def test_empty_buffer(self):
        assert loudness(np.array([], dtype=np.float32)) == 0.0

    def test_scaled_rms(self):
        assert loudness(np.full(1024, 0.1)) == pytest.approx(0.3)

    def test_clamped_to_one(self):
        assert loudness(np.full(1024, 0.5)) == 1.0


class TestIsActive:
    def test_thresholds(self):
        assert is_active(0.0) is False
        assert is_active(0.02) is False
        assert is_active(0.03) is True

    def test_custom_threshold(self):
        assert is_active(0.03, threshold=0.05) is False


class TestBrightness:
    def test_silent_spectrum(self):
        assert brightness(np.full(1024, -np.inf), 44100) == 0.0

    def test_empty_spectrum(self):
        assert brightness(np.array([]), 44100) == 0.0

    def test_single_bin(self):
        db = np.full(1024, -np.inf)
        db[100] = 0.0
        expected = 100 * (44100 / 2) / 1024
        assert brightness(db, 44100) == pytest.approx(expected)

    def test_two_equal_bins(self):
        db = np.full(1024, -np.inf)
        db[100] = -20.0
        db[300] = -20.0
        bin_width = (44100 / 2) / 1024
        assert brightness(db, 44100) == pytest.approx(200 * bin_width)


class TestPitchVarianceProxy:
    def test_silence(self):
        assert pitch_variance_proxy(np.zeros(2048)) == 0.0

    def test_alternating_signs(self):
        data = np.array([1.0 if i % 2 == 0 else -1.0 for i in range(101)])
        assert pitch_variance_proxy(data) == pytest.approx(0.5)

    def test_capped(self):
        data = np.array([1.0 if i % 2 == 0 else -1.0 for i in range(1000)])
        assert pitch_variance_proxy(data) == 1.0

    def test_zero_counts_as_non_negative(self):
        assert pitch_variance_proxy(np.array([0.0, 0.5, 0.0, 0.2])) == 0.0
        assert pitch_variance_proxy(np.array([-0.1, 0.0])) == pytest.approx(1 / 200)


class TestFlatness:
    def test_constant_spectrum_is_flat(self):
        assert flatness(np.full(1024, -30.0)) == pytest.approx(1.0)

    def test_tonal_spectrum_is_not_flat(self):
        db = np.full(1024, -90.0)
        db[200] = 0.0
        assert flatness(db) < 0.1

    def test_low_bins_ignored(self):
        assert flatness(np.zeros(5)) == 0.0

    def test_quiet_bins_ignored(self):
        assert flatness(np.full(1024, -120.0)) == 0.0

    def test_silent_spectrum(self):
        assert flatness(np.full(1024, -np.inf)) == 0.0

    def test_noise_flatter_than_tone(self, audio_config, make_sine):
        rng = np.random.default_rng(0)
        noise = (0.2 * rng.standard_normal(audio_config.fft_size)).astype(np.float32)
        tone = make_sine(440.0)

        noise_flatness = flatness(compute_spectrum_db(noise, audio_config.fft_size))
        tone_flatness = flatness(compute_spectrum_db(tone, audio_config.fft_size))

        assert noise_flatness > tone_flatness


class TestDetectPitch:
    def test_sine_150hz(self, make_sine):
        assert detect_pitch(make_sine(150.0), 44100) == pytest.approx(150.0, abs=3.0)

    def test_sine_220hz(self, make_sine):
        assert detect_pitch(make_sine(220.0), 44100) == pytest.approx(220.0, abs=3.0)

    def test_silence(self):
        assert detect_pitch(np.zeros(2048), 44100) == 0.0

    def test_empty(self):
        assert detect_pitch(np.array([]), 44100) == 0.0

    def test_too_quiet(self, make_sine):
        assert detect_pitch(make_sine(150.0, amplitude=0.005), 44100) == 0.0

    def test_buffer_shorter_than_lowest_period(self, make_sine):
        assert detect_pitch(make_sine(150.0, size=512), 44100) == 0.0

    def test_noise_has_no_pitch(self):
        rng = np.random.default_rng(42)
        noise = 0.3 * rng.standard_normal(2048)
        assert detect_pitch(noise, 44100) == 0.0

    def test_fits_in_one_capture_period(self, audio_config, make_sine):
        tracker = LatencyTracker(budget_ms=audio_config.frame_duration_ms)
        buffer = make_sine(150.0)

        for _ in range(20):
            with tracker.measure("detect_pitch"):
                detect_pitch(buffer, audio_config.sample_rate)

        stats = tracker.get_stats("detect_pitch")
        assert stats["sample_count"] == 20
        assert stats["median_ms"] < audio_config.frame_duration_ms / 4


class TestOutputRanges:
    @pytest.mark.parametrize("seed", range(5))
    def test_random_buffers_stay_in_range(self, audio_config, seed):
        rng = np.random.default_rng(seed)
        amplitude = rng.uniform(0.0, 1.0)
        samples = np.clip(amplitude * rng.standard_normal(audio_config.fft_size), -1, 1)
        samples = samples.astype(np.float32)
        spectrum = compute_spectrum_db(samples, audio_config.fft_size)

        features = extract_features(samples, spectrum, audio_config.sample_rate)

        values = [
            features.rms,
            features.spectral_centroid,
            features.pitch_variance,
            features.pitch,
            features.clarity,
        ]
        assert all(np.isfinite(v) for v in values)
        assert 0.0 <= features.rms <= 1.0
        assert 0.0 <= features.spectral_centroid <= audio_config.sample_rate / 2
        assert 0.0 <= features.pitch_variance <= 1.0
        assert features.pitch >= 0.0
        assert 0.0 <= features.clarity <= 1.0

    def test_silent_frame(self, audio_config):
        frame = AudioFrame.silence(frame_id=0, timestamp_ms=0, config=audio_config)
        features = extract_features(frame.samples, frame.spectrum_db, frame.sample_rate)

        assert features.rms == 0.0
        assert features.spectral_centroid == 0.0
        assert features.pitch_variance == 0.0
        assert features.pitch == 0.0
        assert features.clarity == 0.0
        assert features.is_active is False

    def test_non_finite_spectrum_bins(self):
        db = np.full(1024, -40.0)
        db[10] = np.nan
        db[20] = np.inf
        assert np.isfinite(brightness(db, 44100))
        assert np.isfinite(flatness(db))


class TestFeatureAnalyzer:
    def test_analyze_sine_frame(self, audio_config, make_sine):
        frame = AudioFrame.from_samples(
            make_sine(220.0, amplitude=0.3),
            frame_id=3,
            timestamp_ms=139,
            config=audio_config,
        )

        result = FeatureAnalyzer().analyze(frame, CaptureState())

        assert result.analyzer_name == "features"
        assert result.frame_id == 3
        assert result.features.is_active is True
        assert result.features.pitch == pytest.approx(220.0, abs=3.0)
        assert result.data["pitch"] == result.features.pitch
