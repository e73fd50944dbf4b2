"""
Performance scoring for the live simulation.

Turns the instantaneous tracking error into three exponentially smoothed
scores (stability, speed, accuracy) and an overall letter grade.
"""

from typing import Dict, Any
from dataclasses import dataclass, asdict

from pid_academy.utils.math_utils import exponential_smooth, mean


SMOOTHING_WEIGHT = 0.1
GOOD_PERFORMANCE_THRESHOLD = 80.0
GRADE_THRESHOLDS = (
    (90.0, 'A'),
    (80.0, 'B'),
    (70.0, 'C'),
    (60.0, 'D'),
)


def grade_for(score: float) -> str:
    """Map an overall score in [0, 100] to a letter grade."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return 'F'


@dataclass(frozen=True)
class ScoreCard:
    """Smoothed scores after one update."""
    stability: float = 0.0
    speed: float = 0.0
    accuracy: float = 0.0
    xp_earned: int = 0

    @property
    def overall(self) -> float:
        return mean([self.stability, self.speed, self.accuracy])

    @property
    def grade(self) -> str:
        return grade_for(self.overall)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['overall'] = self.overall
        data['grade'] = self.grade
        return data


class PerformanceScorer:
    """
    Exponentially smoothed performance scores.

    Instantaneous scores per update:
        error_percent = |error| / max(|setpoint|, 1) * 100
        stability     = max(0, 100 - 2 * error_percent)
        speed         = max(0, 100 - min(2 * elapsed, 50))
        accuracy      = max(0, 100 - error_percent)

    Each is blended into its running value with weight 0.1, so displayed
    numbers move slowly. Speed credit decays with time since the last
    reset and bottoms out at 50.

    Example:
        >>> scorer = PerformanceScorer()
        >>> card = scorer.update(error=0.0, setpoint=60.0, elapsed=0.0)
        >>> round(card.stability, 6)
        10.0
    """

    def __init__(self):
        self._stability: float = 0.0
        self._speed: float = 0.0
        self._accuracy: float = 0.0

    @property
    def scores(self) -> ScoreCard:
        """Current smoothed scores."""
        return ScoreCard(self._stability, self._speed, self._accuracy)

    def update(
        self,
        error: float,
        setpoint: float,
        elapsed: float,
        xp_multiplier: float = 1.0
    ) -> ScoreCard:
        """
        Fold one tick's error into the running scores.

        Args:
            error: Tracking error (setpoint - value)
            setpoint: Current setpoint
            elapsed: Seconds since the scores were last reset
            xp_multiplier: Difficulty reward multiplier

        Returns:
            ScoreCard with the smoothed scores and any XP earned this tick
        """
        error_percent = abs(error) / max(abs(setpoint), 1.0) * 100.0

        instant_stability = max(0.0, 100.0 - error_percent * 2.0)
        instant_speed = max(0.0, 100.0 - min(max(elapsed, 0.0) * 2.0, 50.0))
        instant_accuracy = max(0.0, 100.0 - error_percent)

        self._stability = exponential_smooth(self._stability, instant_stability, SMOOTHING_WEIGHT)
        self._speed = exponential_smooth(self._speed, instant_speed, SMOOTHING_WEIGHT)
        self._accuracy = exponential_smooth(self._accuracy, instant_accuracy, SMOOTHING_WEIGHT)

        card = self.scores
        xp_earned = 0
        if card.overall > GOOD_PERFORMANCE_THRESHOLD:
            xp_earned = int(round(xp_multiplier))
        return ScoreCard(card.stability, card.speed, card.accuracy, xp_earned)

    def reset(self) -> None:
        """Zero all scores."""
        self._stability = 0.0
        self._speed = 0.0
        self._accuracy = 0.0
