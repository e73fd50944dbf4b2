"""
Rule-of-thumb feedback on individual PID gains.
"""

from dataclasses import dataclass
from enum import Enum


class AdviceLevel(Enum):
    """Severity of a gain assessment."""
    GOOD = "good"
    WARNING = "warning"
    BAD = "bad"


@dataclass(frozen=True)
class GainAdvice:
    level: AdviceLevel
    message: str


def assess_gain(name: str, value: float) -> GainAdvice:
    """
    Describe how a single gain value is likely to behave.

    Args:
        name: One of 'kp', 'ki', 'kd'
        value: Gain value

    Returns:
        GainAdvice with a level and a short message
    """
    if name == 'kp':
        if value < 0.5:
            return GainAdvice(AdviceLevel.WARNING, "Low Kp: Slow response, may have steady-state error")
        if value > 3:
            return GainAdvice(AdviceLevel.WARNING, "High Kp: Fast response but may oscillate")
        return GainAdvice(AdviceLevel.GOOD, "Good Kp range: Balanced response")

    if name == 'ki':
        if value < 0.01:
            return GainAdvice(AdviceLevel.WARNING, "Low Ki: Steady-state error may persist")
        if value > 1:
            return GainAdvice(AdviceLevel.BAD, "High Ki: May cause integral windup")
        return GainAdvice(AdviceLevel.GOOD, "Good Ki range: Eliminates steady-state error")

    if name == 'kd':
        if value > 0.5:
            return GainAdvice(AdviceLevel.WARNING, "High Kd: Very sensitive to noise")
        if value < 0.01:
            return GainAdvice(AdviceLevel.WARNING, "Low Kd: More overshoot possible")
        return GainAdvice(AdviceLevel.GOOD, "Good Kd range: Reduces overshoot")

    raise ValueError(f"Unknown gain: {name!r}")
