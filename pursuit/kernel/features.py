"""Pure stateless numeric helpers — math only, never raises."""

from __future__ import annotations

import math

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS


def divide(numerator: float, denominator: float) -> float:
    """IEEE 754 division: x/0 gives ±inf, 0/0 and nan/0 give nan."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp `value` into [low, high]. NaN clamps to `low`."""
    if math.isnan(value):
        return low
    return min(high, max(low, value))


def lerp(a: float, b: float, w: float) -> float:
    return (1.0 - w) * a + w * b


def finite_or_none(value: float | None) -> float | None:
    """Map NaN/±inf to None so the value survives JSON serialization."""
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    return value
