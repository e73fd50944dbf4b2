"""
Simulation configuration.
Collects the settings a SimulationLoop is built from.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import json

from pid_academy.core.pid_params import PIDGains
from pid_academy.logging.history import DEFAULT_HISTORY_CAPACITY
from pid_academy.plants import PLANTS
from pid_academy.plants.base_plant import INTEGRATION_STEP
from pid_academy.simulation.difficulty import DIFFICULTY_PROFILES
from pid_academy.utils.validators import (
    ValidationError,
    validate_choice,
    validate_positive,
)


@dataclass
class SimulationConfig:
    """
    Settings for a simulation session.

    ``integration_step`` is the Euler scale applied to every plant step.
    The plant constants assume about 60 ticks per second; a host ticking
    at a different rate should scale this value by 60 / rate.
    """

    plant: str = "car"
    difficulty: str = "easy"
    gains: PIDGains = field(default_factory=PIDGains)
    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    integration_step: float = INTEGRATION_STEP
    seed: Optional[int] = None
    csv_log_path: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        validate_choice(self.plant, "plant", PLANTS)
        validate_choice(self.difficulty, "difficulty", DIFFICULTY_PROFILES)
        if isinstance(self.gains, dict):
            self.gains = PIDGains.from_dict(self.gains)
        if not isinstance(self.gains, PIDGains):
            raise ValidationError("gains must be a PIDGains instance")
        if not isinstance(self.history_capacity, int) or self.history_capacity < 1:
            raise ValidationError("history_capacity must be a positive integer")
        self.integration_step = validate_positive(self.integration_step, "integration_step")

    def copy(self, **changes) -> 'SimulationConfig':
        """Create a copy with optional changes."""
        config = {
            'plant': self.plant,
            'difficulty': self.difficulty,
            'gains': self.gains.copy(),
            'history_capacity': self.history_capacity,
            'integration_step': self.integration_step,
            'seed': self.seed,
            'csv_log_path': self.csv_log_path,
        }
        config.update(changes)
        return SimulationConfig(**config)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'plant': self.plant,
            'difficulty': self.difficulty,
            'gains': self.gains.to_dict(),
            'history_capacity': self.history_capacity,
            'integration_step': self.integration_step,
            'seed': self.seed,
            'csv_log_path': self.csv_log_path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationConfig':
        data = data.copy()
        if 'gains' in data and isinstance(data['gains'], dict):
            data['gains'] = PIDGains.from_dict(data['gains'])
        return cls(**data)

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'SimulationConfig':
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))
