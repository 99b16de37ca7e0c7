"""Rounding and formatting helpers shared by the calculators."""

import math
from typing import Any


def is_finite_number(value: Any) -> bool:
    """True for real numbers that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round to the given number of places with halves rounded up.

    Lot sizes and scores are rounded the way trading platforms display
    them (0.335 -> 0.34), not with banker's rounding.
    """
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def floor_to_step(value: float, step: float) -> float:
    """Floor a value to the nearest lower multiple of step."""
    return math.floor(value / step) * step


def format_percent(value: float) -> str:
    """
    Render a percentage with at most two decimals and no trailing zeros.

    5.0 -> '5', 5.80 -> '5.8', 2.3456 -> '2.35'
    """
    return f"{round_half_up(value, 2):g}"
