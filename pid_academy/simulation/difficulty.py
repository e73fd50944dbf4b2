"""
Difficulty presets scaling noise, periodic disturbance and rewards.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Union

from pid_academy.utils.validators import ValidationError, validate_range


@dataclass(frozen=True)
class DifficultyProfile:
    """
    Immutable difficulty settings.

    Attributes:
        name: Preset name
        noise: Peak-to-peak amplitude of uniform per-tick noise
        disturbance: Amplitude of the periodic disturbance
        delay: Nominal response delay in seconds (carried, not simulated)
        xp_multiplier: Reward multiplier
    """
    name: str
    noise: float
    disturbance: float
    delay: float = 0.0
    xp_multiplier: float = 1.0

    def __post_init__(self):
        validate_range(self.noise, "noise", min_val=0.0)
        validate_range(self.disturbance, "disturbance", min_val=0.0)
        validate_range(self.delay, "delay", min_val=0.0)
        validate_range(self.xp_multiplier, "xp_multiplier", min_val=0.0)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DIFFICULTY_PROFILES: Dict[str, DifficultyProfile] = {
    'easy': DifficultyProfile('easy', noise=0.1, disturbance=0.5, delay=0.0, xp_multiplier=1.0),
    'medium': DifficultyProfile('medium', noise=0.3, disturbance=1.0, delay=0.1, xp_multiplier=1.5),
    'hard': DifficultyProfile('hard', noise=0.5, disturbance=1.5, delay=0.2, xp_multiplier=2.0),
    'expert': DifficultyProfile('expert', noise=0.8, disturbance=2.0, delay=0.3, xp_multiplier=3.0),
}


def get_difficulty(difficulty: Union[str, DifficultyProfile]) -> DifficultyProfile:
    """
    Resolve a preset name or pass a profile through.

    Raises:
        ValidationError: If the name is not a known preset
    """
    if isinstance(difficulty, DifficultyProfile):
        return difficulty
    try:
        return DIFFICULTY_PROFILES[difficulty]
    except (KeyError, TypeError):
        raise ValidationError(
            f"Unknown difficulty: {difficulty!r} "
            f"(expected one of {', '.join(DIFFICULTY_PROFILES)})"
        ) from None
