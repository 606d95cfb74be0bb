"""
Base adapter protocol.

Adapters transform VisualThemes for rendering collaborators.
moodwave does not render anything itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from moodwave.core.mathutils import hsl_to_string
from moodwave.core.state import THEME_FIELDS, VisualTheme


T = TypeVar("T")


class Adapter(ABC, Generic[T]):
    """
    Abstract base for output adapters.

    Usage:
        class MyAdapter(Adapter[MyOutputType]):
            def transform(self, theme: VisualTheme) -> MyOutputType:
                return MyOutputType(...)

        pipeline.on_theme(lambda theme: sink(adapter.transform(theme)))
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name."""
        ...

    @abstractmethod
    def transform(self, theme: VisualTheme) -> T:
        """
        Transform a VisualTheme to target format.

        Args:
            theme: The theme to transform

        Returns:
            Transformed output in target format
        """
        ...

    def batch_transform(self, themes: list[VisualTheme]) -> list[T]:
        """Transform multiple themes. Override for optimization."""
        return [self.transform(t) for t in themes]


class DictAdapter(Adapter[dict[str, Any]]):
    """
    Converts a VisualTheme to a plain dictionary.

    Useful for JSON serialization or simple integrations.
    """

    @property
    def name(self) -> str:
        return "dict"

    def transform(self, theme: VisualTheme) -> dict[str, Any]:
        return {name: getattr(theme, name) for name in THEME_FIELDS}


class CssAdapter(Adapter[dict[str, str]]):
    """
    Converts a VisualTheme to CSS custom properties.

    Produces the two colours, a background gradient with slightly muted
    and darkened stops, blur/opacity, and an animation period between
    5s (speed 1.0) and 25s (speed 0.0).
    """

    @property
    def name(self) -> str:
        return "css"

    def transform(self, theme: VisualTheme) -> dict[str, str]:
        primary = hsl_to_string(
            theme.primary_hue, theme.primary_saturation, theme.primary_lightness
        )
        secondary = hsl_to_string(
            theme.secondary_hue, theme.secondary_saturation, theme.secondary_lightness
        )
        gradient_from = hsl_to_string(
            theme.primary_hue,
            theme.primary_saturation * 0.8,
            max(0.0, theme.primary_lightness - 5),
        )
        gradient_to = hsl_to_string(
            theme.secondary_hue,
            theme.secondary_saturation * 0.8,
            max(0.0, theme.secondary_lightness - 10),
        )

        return {
            "--primary-color": primary,
            "--secondary-color": secondary,
            "--background": f"linear-gradient(to bottom right, {gradient_from} 0%, {gradient_to} 100%)",
            "--blur": f"{theme.blur_amount:.0f}px",
            "--opacity": f"{theme.opacity:.3f}",
            "--animation-duration": f"{animation_duration_s(theme):.2f}s",
            "--scale-range": f"{theme.scale_range:.3f}",
            "--drift": f"{theme.drift_amount:.0f}px",
        }


def animation_duration_s(theme: VisualTheme) -> float:
    """Base animation period in seconds for a theme's speed."""
    return 25 - theme.animation_speed * 20


class CallbackAdapter(Adapter[None]):
    """
    Adapter that invokes a callback for each theme.

    Useful for event-driven architectures.
    """

    def __init__(self, callback: Callable[[VisualTheme], None]) -> None:
        self._callback = callback

    @property
    def name(self) -> str:
        return "callback"

    def transform(self, theme: VisualTheme) -> None:
        self._callback(theme)
