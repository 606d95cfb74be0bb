"""
moodwave Basic Usage Example

Demonstrates the capture and render cadences with synthetic audio.
"""

import asyncio
import json
import logging

from moodwave import AffectPipeline, PipelineConfig
from moodwave.adapters import CssAdapter, DictAdapter
from moodwave.benchmark import BenchmarkSuite
from moodwave.core.state import Quadrant
from moodwave.render import nearest_preset
from moodwave.sources import NoiseSource, SilenceSource, SineSource


def example_sync_processing():
    """One tick per captured frame."""
    print("=" * 60)
    print("Synchronous Processing Example")
    print("=" * 60)

    pipeline = AffectPipeline()
    adapter = DictAdapter()

    source = NoiseSource(duration_ms=1000, amplitude=0.2, seed=7)

    for i, theme in enumerate(pipeline.run_sync(source)):
        output = adapter.transform(theme)
        smoothed = pipeline.smoothed
        print(
            f"Tick {i + 1:2d}: valence={smoothed.valence:+.2f} arousal={smoothed.arousal:+.2f} "
            f"hue={output['primary_hue']:.0f} blur={output['blur_amount']:.0f}px "
            f"→ {nearest_preset(theme).value}"
        )
    print()


def example_semantic_fusion():
    """Semantic scores pull valence, arousal stays acoustic."""
    print("=" * 60)
    print("Semantic Fusion Example")
    print("=" * 60)

    pipeline = AffectPipeline()
    source = SineSource(frequency_hz=180, duration_ms=500, amplitude=0.3)

    pipeline.observe_sentiment(4.0)
    for frame in source.frames():
        fused = pipeline.capture(frame)
        if fused is not None:
            print(f"[{frame.timestamp_ms}ms] fused valence={fused.valence:+.2f} arousal={fused.arousal:+.2f}")
    print()


def example_render_cadence():
    """Render ticks keep converging while capture is silent."""
    print("=" * 60)
    print("Render Cadence Example")
    print("=" * 60)

    pipeline = AffectPipeline(PipelineConfig(smoothing_alpha=0.2))
    pipeline.capture(next(NoiseSource(duration_ms=100, amplitude=0.3, seed=1).frames()))

    for frame in SilenceSource(duration_ms=200).frames():
        pipeline.capture(frame)
        for _ in range(3):
            pipeline.tick(delta_ms=1000 / 60)
        print(f"[{frame.timestamp_ms}ms] smoothed={pipeline.smoothed.as_tuple()}")
    print()


def example_simulation():
    """Quick states bypass the pipeline."""
    print("=" * 60)
    print("Simulation Example")
    print("=" * 60)

    pipeline = AffectPipeline()
    css = CssAdapter()
    for quadrant in Quadrant:
        pipeline.simulate_quadrant(quadrant)
        print(f"{quadrant.value:12s} {json.dumps(css.transform(pipeline.tick()))}")
    pipeline.clear_simulation()
    print()


async def example_async():
    """Async driver yields control between frames."""
    print("=" * 60)
    print("Async Example")
    print("=" * 60)

    pipeline = AffectPipeline()
    count = 0
    async for _ in pipeline.run(SineSource(frequency_hz=220, duration_ms=300)):
        count += 1
    print(f"Ticked {count} themes, smoothed={pipeline.smoothed.as_tuple()}\n")


def example_benchmark():
    suite = BenchmarkSuite()
    suite.run("noise", AffectPipeline(), NoiseSource(duration_ms=2000, amplitude=0.2, seed=3))
    print(suite.summary())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_sync_processing()
    example_semantic_fusion()
    example_render_cadence()
    example_simulation()
    asyncio.run(example_async())
    example_benchmark()
