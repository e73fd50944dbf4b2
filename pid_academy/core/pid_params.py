"""
PID gain configuration.
Encapsulates the three tunable gains in a validated, serializable record.
"""

from dataclasses import dataclass
from typing import Dict, Any
import json

from pid_academy.utils.validators import validate_finite


DEFAULT_KP = 1.0
DEFAULT_KI = 0.1
DEFAULT_KD = 0.05


@dataclass
class PIDGains:
    """
    Proportional, integral and derivative gains.

    Gains are unconstrained in sign; the sliders that feed them usually
    keep them within [0, 5]. NaN and infinite values are rejected.
    """

    kp: float = DEFAULT_KP
    ki: float = DEFAULT_KI
    kd: float = DEFAULT_KD

    def __post_init__(self):
        """Validate gains after initialization."""
        self.kp = validate_finite(self.kp, "kp")
        self.ki = validate_finite(self.ki, "ki")
        self.kd = validate_finite(self.kd, "kd")

    def copy(self, **changes) -> 'PIDGains':
        """
        Create a copy with optional gain changes.

        Args:
            **changes: Gains to override

        Returns:
            New PIDGains instance
        """
        gains = self.to_dict()
        gains.update(changes)
        return PIDGains(**gains)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'kp': self.kp,
            'ki': self.ki,
            'kd': self.kd,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PIDGains':
        """Create from dictionary, ignoring unrelated keys."""
        return cls(**{k: data[k] for k in ('kp', 'ki', 'kd') if k in data})

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'PIDGains':
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    def __str__(self) -> str:
        return f"PIDGains(Kp={self.kp:.4f}, Ki={self.ki:.4f}, Kd={self.kd:.4f})"
