"""
Core processing pipeline.

Two cadences drive the pipeline:

- capture: one call per audio buffer (and per recognized transcript),
  producing a fused emotion target;
- render: one tick per display refresh, smoothing toward the latest
  target and interpolating a visual theme.

They meet in a single EmotionSlot holding an immutable EmotionState.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Iterator

from moodwave.analyzers.base import Analyzer, AnalysisResult
from moodwave.analyzers.emotion import EmotionAnalyzer, EmotionResult, audio_to_emotion
from moodwave.analyzers.features import FeatureAnalyzer, FeatureResult
from moodwave.core.state import AudioFeatures, EmotionState, Quadrant, VisualTheme
from moodwave.core.stream import AudioFrame, AudioSource
from moodwave.fusion.sentiment import SentimentFusion, SentimentScorer
from moodwave.render.smoother import DEFAULT_EMOTION, NOMINAL_TICK_MS, TemporalSmoother
from moodwave.render.theme import ThemeInterpolator

logger = logging.getLogger(__name__)


SIMULATION_PRESETS: dict[Quadrant, EmotionState] = {
    Quadrant.MELANCHOLIC: EmotionState(valence=-0.8, arousal=-0.8),
    Quadrant.CALM: EmotionState(valence=0.6, arousal=-0.5),
    Quadrant.ANXIOUS: EmotionState(valence=-0.5, arousal=0.9),
    Quadrant.JOYFUL: EmotionState(valence=0.9, arousal=0.8),
}


@dataclass
class PipelineConfig:
    """Pipeline configuration."""
    activity_threshold: float = 0.02
    min_pitch_hz: float = 60.0
    max_pitch_hz: float = 1000.0
    valence_steepness: float = 3.0
    arousal_steepness: float = 2.5
    smoothing_alpha: float = 0.15
    nominal_tick_ms: float = NOMINAL_TICK_MS
    semantic_scale: float = 3.0
    semantic_weight: float = 0.6
    initial_emotion: EmotionState = DEFAULT_EMOTION
    circular_hue: bool = False

    def __post_init__(self) -> None:
        if not (0.0 < self.smoothing_alpha <= 1.0):
            raise ValueError(f"smoothing_alpha must be in (0, 1], got {self.smoothing_alpha}")
        if not (0.0 <= self.semantic_weight <= 1.0):
            raise ValueError(f"semantic_weight must be in [0, 1], got {self.semantic_weight}")
        if self.semantic_scale <= 0:
            raise ValueError(f"semantic_scale must be positive, got {self.semantic_scale}")
        if self.activity_threshold < 0:
            raise ValueError(f"activity_threshold must be >= 0, got {self.activity_threshold}")
        if not (0.0 < self.min_pitch_hz < self.max_pitch_hz):
            raise ValueError(
                f"pitch bounds must satisfy 0 < min < max, got "
                f"{self.min_pitch_hz}..{self.max_pitch_hz}"
            )
        if self.nominal_tick_ms <= 0:
            raise ValueError(f"nominal_tick_ms must be positive, got {self.nominal_tick_ms}")


class EmotionSlot:
    """
    The one location shared by the capture and render cadences.

    Holds a reference to an immutable EmotionState. Writers replace the
    whole reference, so a reader never sees valence and arousal from
    different cycles.
    """

    def __init__(self, initial: EmotionState = DEFAULT_EMOTION) -> None:
        self._lock = threading.Lock()
        self._value = initial

    def publish(self, state: EmotionState) -> None:
        with self._lock:
            self._value = state

    def read(self) -> EmotionState:
        with self._lock:
            return self._value


class CaptureState:
    """Results of the current capture cycle."""

    def __init__(self) -> None:
        self.features: AudioFeatures = AudioFeatures()
        self.raw_emotion: EmotionState | None = None
        self.fused_emotion: EmotionState | None = None
        self.analysis_results: dict[str, AnalysisResult] = {}


class AffectPipeline:
    """
    Main processing pipeline.

    Capture side: frames go through feature extraction and emotion
    mapping, then semantic fusion; active frames publish the fused
    estimate. Render side: tick() smooths toward the published estimate
    and returns the interpolated theme.

    Usage:
        pipeline = AffectPipeline(config)

        # capture thread / audio callback
        pipeline.capture(frame)
        pipeline.observe_sentiment(score)

        # render loop
        theme = pipeline.tick()
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        scorer: SentimentScorer | None = None,
    ) -> None:
        self._config = config or PipelineConfig()
        self._scorer = scorer
        self._analyzers: list[Analyzer] = [
            FeatureAnalyzer(
                activity_threshold=self._config.activity_threshold,
                min_pitch_hz=self._config.min_pitch_hz,
                max_pitch_hz=self._config.max_pitch_hz,
            ),
            EmotionAnalyzer(
                valence_steepness=self._config.valence_steepness,
                arousal_steepness=self._config.arousal_steepness,
            ),
        ]
        self._fusion = SentimentFusion(
            scale=self._config.semantic_scale,
            semantic_weight=self._config.semantic_weight,
        )
        self._smoother = TemporalSmoother(
            alpha=self._config.smoothing_alpha,
            initial=self._config.initial_emotion,
            nominal_tick_ms=self._config.nominal_tick_ms,
        )
        self._interpolator = ThemeInterpolator(circular_hue=self._config.circular_hue)
        self._slot = EmotionSlot(self._config.initial_emotion)
        self._state = CaptureState()
        self._callbacks: list[Callable[[VisualTheme], None]] = []
        self._simulation: EmotionState | None = None
        self._last_raw: EmotionState | None = None
        self._theme: VisualTheme = self._interpolator(self._smoother.current)
        self._running = False

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def slot(self) -> EmotionSlot:
        return self._slot

    @property
    def fusion(self) -> SentimentFusion:
        return self._fusion

    @property
    def smoothed(self) -> EmotionState:
        """Displayed (smoothed) emotion."""
        return self._smoother.current

    @property
    def target(self) -> EmotionState:
        """Latest fused emotion published by the capture cadence."""
        return self._slot.read()

    @property
    def theme(self) -> VisualTheme:
        """Theme returned by the last tick."""
        return self._theme

    @property
    def is_simulating(self) -> bool:
        return self._simulation is not None

    def add_analyzer(self, analyzer: Analyzer) -> AffectPipeline:
        """Append an analyzer after the built-in ones. Returns self for chaining."""
        self._analyzers.append(analyzer)
        return self

    def on_theme(self, callback: Callable[[VisualTheme], None]) -> AffectPipeline:
        """Register a callback for every ticked theme. Returns self for chaining."""
        self._callbacks.append(callback)
        return self

    # capture cadence

    def capture(self, frame: AudioFrame) -> EmotionState | None:
        """
        Process one capture buffer.

        Returns the fused estimate if it was published, None if the frame
        was inactive, simulation is on, or an analyzer failed.
        """
        state = CaptureState()

        for analyzer in self._analyzers:
            try:
                result = analyzer.analyze(frame, state)
            except Exception as e:
                logger.warning(f"Analyzer {analyzer.name} failed on frame {frame.frame_id}: {e}")
                self._state = state
                return None
            state.analysis_results[analyzer.name] = result
            if isinstance(result, FeatureResult):
                state.features = result.features
            elif isinstance(result, EmotionResult):
                state.raw_emotion = result.emotion

        self._state = state
        if state.raw_emotion is None:
            return None
        return self._publish(state.features, state.raw_emotion)

    def process_features(self, features: AudioFeatures) -> EmotionState | None:
        """Capture path for callers that extract features themselves."""
        state = CaptureState()
        state.features = features
        state.raw_emotion = audio_to_emotion(
            features,
            self._config.valence_steepness,
            self._config.arousal_steepness,
        )
        self._state = state
        return self._publish(features, state.raw_emotion)

    def _publish(self, features: AudioFeatures, raw: EmotionState) -> EmotionState | None:
        if self._simulation is not None:
            logger.debug("Simulation active, capture not published")
            return None
        if not features.is_active:
            logger.debug(f"Inactive buffer (rms={features.rms:.4f}), keeping previous target")
            return None

        self._last_raw = raw
        fused = self._fusion.fuse(raw)
        self._state.fused_emotion = fused
        self._slot.publish(fused)
        logger.debug(f"Published valence={fused.valence:.3f} arousal={fused.arousal:.3f}")
        return fused

    def observe_sentiment(self, score: float) -> float:
        """
        Feed a raw semantic score; returns the sticky semantic valence.

        Transcripts usually finalize after the speaker has stopped, so the
        score is fused with the acoustic estimate of the last active buffer
        and published right away instead of waiting for the next one.
        """
        signal = self._fusion.observe(score)
        if self._simulation is not None or self._last_raw is None:
            return signal

        fused = self._fusion.fuse(self._last_raw)
        self._slot.publish(fused)
        logger.debug(f"Published valence={fused.valence:.3f} arousal={fused.arousal:.3f} on sentiment event")
        return signal

    def observe_transcript(self, text: str) -> float:
        """Score a transcript segment with the configured scorer."""
        if self._scorer is None:
            logger.debug("No sentiment scorer configured, transcript ignored")
            return self._fusion.signal
        return self.observe_sentiment(self._scorer.score(text))

    # render cadence

    def tick(self, delta_ms: float | None = None) -> VisualTheme:
        """
        Advance the display by one render tick.

        Args:
            delta_ms: Time since the previous tick; None means one nominal tick

        Returns:
            VisualTheme for this tick
        """
        if self._simulation is not None:
            theme = self._interpolator(self._simulation)
        else:
            smoothed = self._smoother.step(self._slot.read(), delta_ms)
            theme = self._interpolator(smoothed)

        self._theme = theme
        for callback in self._callbacks:
            callback(theme)
        return theme

    # simulation override

    def set_simulation(self, valence: float, arousal: float) -> None:
        """Bypass the pipeline and drive the theme from a fixed point."""
        if self._simulation is None:
            logger.info("Simulation mode on")
        self._simulation = EmotionState(valence=valence, arousal=arousal)

    def simulate_quadrant(self, quadrant: Quadrant | str) -> EmotionState:
        """Apply one of the quick-state presets."""
        try:
            key = Quadrant(quadrant)
        except ValueError:
            raise ValueError(f"Unknown quadrant {quadrant!r}") from None
        preset = SIMULATION_PRESETS[key]
        self.set_simulation(preset.valence, preset.arousal)
        return preset

    def clear_simulation(self) -> None:
        if self._simulation is not None:
            logger.info("Simulation mode off")
        self._simulation = None

    # drivers

    def run_sync(self, source: AudioSource) -> Iterator[VisualTheme]:
        """
        Capture each frame of source and tick once after it.

        Yields one VisualTheme per frame.
        """
        self._running = True

        try:
            for frame in source.frames():
                if not self._running:
                    break

                self.capture(frame)
                yield self.tick()
        finally:
            self._running = False
            source.close()

    async def run(self, source: AudioSource) -> AsyncIterator[VisualTheme]:
        """Async variant of run_sync that yields control between frames."""
        self._running = True

        try:
            for frame in source.frames():
                if not self._running:
                    break

                self.capture(frame)
                yield self.tick()

                await asyncio.sleep(0)
        finally:
            self._running = False
            source.close()

    def stop(self) -> None:
        """Stop the pipeline."""
        self._running = False

    def reset(self) -> None:
        """Start a fresh session."""
        for analyzer in self._analyzers:
            analyzer.reset()
        self._fusion.reset()
        self._smoother.reset()
        self._slot.publish(self._config.initial_emotion)
        self._state = CaptureState()
        self._simulation = None
        self._last_raw = None
        self._theme = self._interpolator(self._smoother.current)
        logger.info("Session reset")
