"""Tests for latency tracking and benchmarks."""

from moodwave.benchmark import BenchmarkSuite, LatencyTracker
from moodwave.core.pipeline import AffectPipeline
from moodwave.sources import NoiseSource


class TestLatencyTracker:
    def test_stop_without_start(self):
        tracker = LatencyTracker()
        assert tracker.stop("missing") == 0.0
        assert tracker.get_stats("missing") == {}
        assert tracker.is_over_budget("missing") is False

    def test_measure_records(self):
        tracker = LatencyTracker(budget_ms=1000.0)
        for _ in range(3):
            with tracker.measure("op"):
                sum(range(100))

        stats = tracker.get_stats("op")
        assert stats["sample_count"] == 3
        assert stats["min_ms"] <= stats["mean_ms"] <= stats["max_ms"]
        assert stats["over_budget_rate"] == 0.0
        assert tracker.is_over_budget("op") is False

    def test_reset(self):
        tracker = LatencyTracker()
        with tracker.measure("op"):
            pass
        tracker.reset()
        assert tracker.get_all_stats() == {}


class TestBenchmarkSuite:
    def test_run_times_both_cadences(self):
        suite = BenchmarkSuite()
        source = NoiseSource(duration_ms=500, amplitude=0.3, seed=5)

        result = suite.run("noise", AffectPipeline(), source)

        assert result.frames_processed == 22050 // 2048
        assert result.frames_published == result.frames_processed
        assert set(result.latency_stats) == {"capture", "tick"}
        assert result.realtime_factor > 0
        assert result.metadata["latency_budget_ms"] == source.config.frame_duration_ms
        assert "Benchmark: noise" in suite.summary()
        assert suite.results == [result]
