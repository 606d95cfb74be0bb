"""
Base analyzer protocol.

Analyzers turn one capture buffer into signals.
They do not smooth or publish—the pipeline does that.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from moodwave.core.stream import AudioFrame
    from moodwave.core.pipeline import CaptureState


@dataclass
class AnalysisResult:
    """Base result from an analyzer."""
    analyzer_name: str
    frame_id: int
    timestamp_ms: int
    data: dict[str, Any] = field(default_factory=dict)


class Analyzer(ABC):
    """
    Abstract base for capture-cadence analyzers.

    Analyzers run in the order they were registered; a later analyzer
    may read results of earlier ones from the capture state.

    Implementation requirements:
    - Must finish well inside one capture period
    - Must not block
    - Must not modify capture state directly (return results only)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique analyzer name."""
        ...

    @abstractmethod
    def analyze(self, frame: AudioFrame, state: CaptureState) -> AnalysisResult:
        """
        Analyze a single frame.

        Args:
            frame: Current capture buffer
            state: Results of this cycle so far (read-only)

        Returns:
            AnalysisResult with extracted signals
        """
        ...

    def reset(self) -> None:
        """Reset analyzer state (if any)."""
        pass
