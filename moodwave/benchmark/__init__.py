"""Benchmarking and latency measurement tools."""

from moodwave.benchmark.metrics import (
    LatencyTracker,
    BenchmarkResult,
    BenchmarkSuite,
)

__all__ = [
    "LatencyTracker",
    "BenchmarkResult",
    "BenchmarkSuite",
]
