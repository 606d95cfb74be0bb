"""Tests for the feature → emotion mapping."""

import math

import numpy as np
import pytest

from moodwave.analyzers.emotion import (
    EmotionAnalyzer,
    audio_to_emotion,
    estimate_arousal,
    estimate_valence,
)
from moodwave.core.mathutils import clamp, lerp, map_range, sigmoid
from moodwave.core.pipeline import CaptureState
from moodwave.core.state import AudioFeatures
from moodwave.core.stream import AudioFrame


class TestSigmoid:
    @pytest.mark.parametrize("k", [0.5, 2.5, 3.0, 10.0])
    def test_zero_maps_to_zero(self, k):
        assert sigmoid(0.0, k) == 0.0

    def test_strictly_increasing(self):
        xs = np.linspace(-3, 3, 61)
        ys = [sigmoid(float(x), 3.0) for x in xs]
        assert all(b > a for a, b in zip(ys, ys[1:]))

    def test_bounded(self):
        for x in np.linspace(-4, 4, 33):
            assert -1.0 < sigmoid(float(x), 2.5) < 1.0

    def test_matches_logistic_form(self):
        x, k = 0.37, 3.0
        expected = 2 / (1 + math.exp(-k * x)) - 1
        assert sigmoid(x, k) == pytest.approx(expected)

    def test_huge_input_does_not_overflow(self):
        assert sigmoid(1e6, 3.0) == pytest.approx(1.0)
        assert sigmoid(-1e6, 3.0) == pytest.approx(-1.0)


class TestMapRange:
    def test_midpoint(self):
        assert map_range(2000, 1000, 3000, -1, 1) == pytest.approx(0.0)

    def test_extrapolates(self):
        assert map_range(4000, 1000, 3000, -1, 1) == pytest.approx(2.0)
        assert map_range(0, 1000, 3000, -1, 1) == pytest.approx(-2.0)

    def test_degenerate_input_range(self):
        assert map_range(5, 1, 1, -1, 1) == -1

    def test_lerp_clamps_t(self):
        assert lerp(10, 20, 1.5) == 20
        assert lerp(10, 20, -0.5) == 10
        assert clamp(2.0, -1.0, 1.0) == 1.0


class TestValence:
    def test_neutral_brightness_without_pitch(self):
        features = AudioFeatures(spectral_centroid=2000, pitch=0.0)
        assert estimate_valence(features) == pytest.approx(0.0)

    def test_undetected_pitch_contributes_nothing(self):
        base = AudioFeatures(spectral_centroid=2500, pitch=0.0)
        low = AudioFeatures(spectral_centroid=2500, pitch=40.0)
        assert estimate_valence(base) == estimate_valence(low)

    def test_pitch_and_brightness(self):
        features = AudioFeatures(spectral_centroid=3000, pitch=300)
        assert estimate_valence(features) == pytest.approx(math.tanh(1.5 * 0.8))

    def test_extreme_brightness_saturates(self):
        features = AudioFeatures(spectral_centroid=20000)
        assert estimate_valence(features) == pytest.approx(math.tanh(1.5))

    def test_dark_voice_is_negative(self):
        features = AudioFeatures(spectral_centroid=1100, pitch=110)
        assert estimate_valence(features) < -0.5


class TestArousal:
    def test_silence_is_low(self):
        assert estimate_arousal(AudioFeatures()) == pytest.approx(math.tanh(-1.25))

    def test_louder_is_higher(self):
        quiet = AudioFeatures(rms=0.05, clarity=0.3, pitch_variance=0.2)
        loud = AudioFeatures(rms=0.35, clarity=0.3, pitch_variance=0.2)
        assert estimate_arousal(loud) > estimate_arousal(quiet)

    def test_noisier_is_higher(self):
        tonal = AudioFeatures(rms=0.2, clarity=0.1, pitch_variance=0.2)
        noisy = AudioFeatures(rms=0.2, clarity=0.6, pitch_variance=0.2)
        assert estimate_arousal(noisy) > estimate_arousal(tonal)


class TestAudioToEmotion:
    def test_loud_bright_voice_is_joyful(self):
        features = AudioFeatures(
            rms=0.35,
            spectral_centroid=2800,
            pitch_variance=0.2,
            pitch=250,
            clarity=0.5,
            is_active=True,
        )
        emotion = audio_to_emotion(features)
        assert emotion.valence > 0.5
        assert emotion.arousal > 0.5

    def test_always_in_range(self):
        rng = np.random.default_rng(1)
        for _ in range(50):
            features = AudioFeatures(
                rms=rng.uniform(0, 1),
                spectral_centroid=rng.uniform(0, 22050),
                pitch_variance=rng.uniform(0, 1),
                pitch=rng.uniform(0, 1000),
                clarity=rng.uniform(0, 1),
            )
            emotion = audio_to_emotion(features)
            assert -1.0 <= emotion.valence <= 1.0
            assert -1.0 <= emotion.arousal <= 1.0


class TestEmotionAnalyzer:
    def test_reads_features_from_capture_state(self, audio_config):
        state = CaptureState()
        state.features = AudioFeatures(rms=0.35, spectral_centroid=2800, pitch=250, clarity=0.5, is_active=True)
        frame = AudioFrame.silence(frame_id=1, timestamp_ms=46, config=audio_config)

        result = EmotionAnalyzer().analyze(frame, state)

        assert result.analyzer_name == "emotion"
        assert result.is_active is True
        assert result.emotion == audio_to_emotion(state.features)
        assert result.data["quadrant"] == "joyful"
