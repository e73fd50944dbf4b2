"""
Raw control surface state supplied by the presentation layer.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any

import numpy as np

from pid_academy.utils.validators import (
    ValidationError,
    validate_range,
    validate_choice,
)


PENDULUM_FORCES = (-15.0, 0.0, 15.0)


@dataclass
class ControlInputs:
    """
    Raw inputs for every plant.

    Only the fields relevant to the active plant are read:
    gas/brake (car), throttle and joystick (drone), heater (temperature)
    and force (pendulum).
    """

    gas: bool = False
    brake: bool = False
    throttle: float = 50.0
    joystick_x: float = 0.0
    joystick_y: float = 0.0
    heater: float = 0.0
    force: float = 0.0

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.gas, (bool, np.bool_)) or not isinstance(self.brake, (bool, np.bool_)):
            raise ValidationError("gas and brake must be booleans")
        self.gas = bool(self.gas)
        self.brake = bool(self.brake)
        self.throttle = validate_range(self.throttle, "throttle", 0.0, 100.0)
        self.joystick_x = validate_range(self.joystick_x, "joystick_x", -1.0, 1.0)
        self.joystick_y = validate_range(self.joystick_y, "joystick_y", -1.0, 1.0)
        self.heater = validate_range(self.heater, "heater", 0.0, 100.0)
        self.force = float(validate_choice(self.force, "force", PENDULUM_FORCES))

    def copy(self, **changes) -> 'ControlInputs':
        """Create a copy with some inputs changed."""
        inputs = self.to_dict()
        inputs.update(changes)
        return ControlInputs(**inputs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
