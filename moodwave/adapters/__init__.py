"""Output adapters for rendering collaborators."""

from moodwave.adapters.base import Adapter, CallbackAdapter, CssAdapter, DictAdapter

__all__ = [
    "Adapter",
    "CallbackAdapter",
    "CssAdapter",
    "DictAdapter",
]
