"""
Mathematical helpers shared by the controller, plants and scorer.
Uses numpy for clipping and averaging.
"""

from typing import Optional, Sequence
import numpy as np


def clamp(value: float, min_val: Optional[float], max_val: Optional[float]) -> float:
    """Clamp a value between minimum and maximum bounds."""
    if min_val is None and max_val is None:
        return value
    return float(np.clip(value, min_val, max_val))


def exponential_smooth(previous: float, instant: float, weight: float = 0.1) -> float:
    """
    Blend a new sample into a running value.

    Returns ``(1 - weight) * previous + weight * instant``.
    """
    if not 0 < weight <= 1:
        raise ValueError("weight must be in (0, 1]")
    return previous * (1.0 - weight) + instant * weight


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))
