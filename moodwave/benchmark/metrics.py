"""
Benchmark & latency measurement.

Both cadences have hard deadlines: a capture cycle must finish before the
next buffer arrives, a render tick before the next refresh.
"""

from __future__ import annotations

import statistics
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from moodwave.core.pipeline import AffectPipeline
    from moodwave.core.stream import AudioSource


class LatencyTracker:
    """
    Named latency measurements against a time budget.

    Usage:
        tracker = LatencyTracker(budget_ms=46.4)

        with tracker.measure("capture"):
            pipeline.capture(frame)

        if tracker.is_over_budget("capture"):
            logger.warning("Capture exceeded one buffer period")
    """

    def __init__(
        self,
        budget_ms: float = 10.0,
        history_size: int = 1000,
    ) -> None:
        self._budget_ms = budget_ms
        self._measurements: dict[str, deque[float]] = {}
        self._history_size = history_size
        self._current_start: dict[str, int] = {}

    @property
    def budget_ms(self) -> float:
        return self._budget_ms

    def start(self, name: str) -> None:
        """Start timing a named operation."""
        self._current_start[name] = time.perf_counter_ns()

    def stop(self, name: str) -> float:
        """Stop timing and record measurement. Returns duration in ms."""
        if name not in self._current_start:
            return 0.0

        duration_ms = (time.perf_counter_ns() - self._current_start.pop(name)) / 1_000_000
        self._measurements.setdefault(name, deque(maxlen=self._history_size)).append(duration_ms)
        return duration_ms

    def measure(self, name: str) -> _MeasureContext:
        """Context manager for measuring an operation."""
        return _MeasureContext(self, name)

    def get_stats(self, name: str) -> dict[str, float]:
        """Get statistics for a named operation."""
        data = list(self._measurements.get(name, ()))
        if not data:
            return {}

        return {
            "mean_ms": statistics.mean(data),
            "median_ms": statistics.median(data),
            "min_ms": min(data),
            "max_ms": max(data),
            "p95_ms": _percentile(data, 95),
            "p99_ms": _percentile(data, 99),
            "jitter_ms": _jitter(data),
            "over_budget_rate": sum(1 for x in data if x > self._budget_ms) / len(data),
            "sample_count": len(data),
        }

    def get_all_stats(self) -> dict[str, dict[str, float]]:
        """Get statistics for all tracked operations."""
        return {name: self.get_stats(name) for name in self._measurements}

    def is_over_budget(self, name: str) -> bool:
        """Check if last measurement exceeded budget."""
        data = self._measurements.get(name)
        if not data:
            return False
        return data[-1] > self._budget_ms

    def reset(self) -> None:
        """Reset all measurements."""
        self._measurements.clear()
        self._current_start.clear()


def _percentile(data: list[float], p: int) -> float:
    ordered = sorted(data)
    idx = int(len(ordered) * p / 100)
    return ordered[min(idx, len(ordered) - 1)]


def _jitter(data: list[float]) -> float:
    """Mean absolute difference between consecutive samples."""
    if len(data) < 2:
        return 0.0
    return statistics.mean(abs(b - a) for a, b in zip(data, data[1:]))


class _MeasureContext:
    """Context manager for latency measurement."""

    def __init__(self, tracker: LatencyTracker, name: str) -> None:
        self._tracker = tracker
        self._name = name

    def __enter__(self) -> _MeasureContext:
        self._tracker.start(self._name)
        return self

    def __exit__(self, *args) -> None:
        self._tracker.stop(self._name)


@dataclass
class BenchmarkResult:
    """Result of a benchmark run."""
    name: str
    duration_seconds: float
    frames_processed: int
    frames_published: int
    latency_stats: dict[str, dict[str, float]]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def realtime_factor(self) -> float:
        """How much faster than realtime. >1 means faster than realtime."""
        frame_duration_ms = self.metadata.get("frame_duration_ms", 0.0)
        audio_seconds = self.frames_processed * frame_duration_ms / 1000
        return audio_seconds / self.duration_seconds if self.duration_seconds > 0 else 0.0

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Benchmark: {self.name}",
            f"  Duration: {self.duration_seconds:.3f}s",
            f"  Frames: {self.frames_processed} ({self.frames_published} published)",
            f"  Realtime factor: {self.realtime_factor:.1f}x",
        ]
        for stage, stats in self.latency_stats.items():
            lines.append(
                f"  {stage}: mean {stats.get('mean_ms', 0):.2f}ms, "
                f"p99 {stats.get('p99_ms', 0):.2f}ms, "
                f"over budget {stats.get('over_budget_rate', 0) * 100:.1f}%"
            )
        return "\n".join(lines)


class BenchmarkSuite:
    """
    Runs a source through a pipeline and times both cadences.

    The capture budget defaults to one buffer period of the source.
    """

    def __init__(self, latency_budget_ms: float | None = None) -> None:
        self._latency_budget_ms = latency_budget_ms
        self._results: list[BenchmarkResult] = []

    def run(self, name: str, pipeline: AffectPipeline, source: AudioSource) -> BenchmarkResult:
        """Capture every frame of source, ticking once per frame."""
        budget_ms = self._latency_budget_ms or source.config.frame_duration_ms
        tracker = LatencyTracker(budget_ms=budget_ms)

        frames_processed = 0
        frames_published = 0
        start_time = time.perf_counter()

        try:
            for frame in source.frames():
                with tracker.measure("capture"):
                    published = pipeline.capture(frame)
                with tracker.measure("tick"):
                    pipeline.tick()

                frames_processed += 1
                if published is not None:
                    frames_published += 1
        finally:
            source.close()

        result = BenchmarkResult(
            name=name,
            duration_seconds=time.perf_counter() - start_time,
            frames_processed=frames_processed,
            frames_published=frames_published,
            latency_stats=tracker.get_all_stats(),
            metadata={
                "frame_duration_ms": source.config.frame_duration_ms,
                "sample_rate": source.config.sample_rate,
                "latency_budget_ms": budget_ms,
            },
        )
        self._results.append(result)
        return result

    @property
    def results(self) -> list[BenchmarkResult]:
        return list(self._results)

    def summary(self) -> str:
        """Get summary of all benchmark results."""
        return "\n\n".join(r.summary() for r in self._results)
