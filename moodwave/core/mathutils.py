"""
Scalar helpers shared by the mapping, smoothing and theme stages.

Everything here is pure and total over finite floats.
"""

from __future__ import annotations

import math


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp value into [lo, hi]."""
    return min(max(value, lo), hi)


def lerp(start: float, end: float, t: float) -> float:
    """
    Linear interpolation with t clamped to [0, 1].

    Written as a weighted sum so that t=0 returns start and t=1
    returns end bit-for-bit.
    """
    t = clamp(t, 0.0, 1.0)
    return start * (1.0 - t) + end * t


def map_range(
    value: float,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float,
) -> float:
    """
    Map value from [in_min, in_max] onto [out_min, out_max].

    Values outside the input range extrapolate; callers clamp afterwards
    when they need a bounded result.
    """
    span = in_max - in_min
    if span == 0:
        return out_min
    normalized = (value - in_min) / span
    return out_min + (out_max - out_min) * normalized


def sigmoid(x: float, k: float = 4.0) -> float:
    """
    Bipolar sigmoid ``2 / (1 + exp(-k*x)) - 1``.

    Maps the real line onto (-1, 1) and pushes moderate inputs toward the
    extremes. Evaluated as ``tanh(k*x/2)``, which is the same curve and
    cannot overflow.
    """
    return math.tanh(k * x / 2.0)


def exponential_smooth(current: float, target: float, alpha: float = 0.1) -> float:
    """One step of first-order exponential smoothing toward target."""
    return current + alpha * (target - current)


def lerp_hue(start: float, end: float, t: float) -> float:
    """Interpolate two hues in degrees along the shorter arc."""
    diff = end - start
    if diff > 180:
        diff -= 360
    elif diff < -180:
        diff += 360
    return (start + diff * clamp(t, 0.0, 1.0) + 360) % 360


def hsl_to_string(hue: float, saturation: float, lightness: float) -> str:
    """Format an HSL triple as a CSS colour."""
    return f"hsl({round(hue)}, {round(saturation)}%, {round(lightness)}%)"
