"""
Base plant model abstract class.
Defines the interface shared by the four simulated systems.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Tuple

from pid_academy.plants.control_inputs import ControlInputs
from pid_academy.utils.math_utils import clamp


# Euler step scale the plant constants were tuned against (about 60 ticks/s)
INTEGRATION_STEP = 0.1


@dataclass(frozen=True)
class DisturbanceTerms:
    """Additive disturbance terms for one tick."""
    noise: float = 0.0
    periodic: float = 0.0


@dataclass(frozen=True)
class PlantState:
    """
    Snapshot of a plant.

    Attributes:
        value: Measured quantity (speed, altitude, temperature or angle)
        drive: Combined input the plant received on its last step
        aux: Plant-specific readouts (e.g. drone total power)
    """
    value: float
    drive: float = 0.0
    aux: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'drive': self.drive, **self.aux}


class BasePlant(ABC):
    """
    Abstract base class for plant models.

    Plants hold no simulation state of their own: ``step`` maps the caller's
    PlantState and this tick's inputs to a new PlantState. Each subclass
    fixes its physical range, initial conditions and the frequency of the
    periodic disturbance it is subjected to.
    """

    name: str = ""
    title: str = ""
    description: str = ""
    units: str = ""
    value_range: Tuple[float, float] = (0.0, 100.0)
    initial_value: float = 0.0
    initial_setpoint: float = 0.0
    disturbance_frequency: float = 0.0

    @abstractmethod
    def manual_input(self, controls: ControlInputs) -> float:
        """
        Combine the raw control surface state into one manual input.

        Args:
            controls: Current raw inputs from the presentation layer

        Returns:
            Manual input added alongside the controller output
        """
        pass

    @abstractmethod
    def step(
        self,
        state: PlantState,
        controller_output: float,
        manual_input: float,
        disturbance: DisturbanceTerms,
        dt: float = INTEGRATION_STEP
    ) -> PlantState:
        """
        Advance the plant by one tick.

        Args:
            state: Current plant state
            controller_output: PID output
            manual_input: User-supplied input
            disturbance: Noise and periodic disturbance for this tick
            dt: Integration scale applied to the state derivative

        Returns:
            New plant state, clamped to the plant's range
        """
        pass

    def initial_state(self) -> PlantState:
        """State the plant starts from after a switch or reset."""
        return PlantState(value=self.initial_value)

    def _integrate(self, value: float, derivative: float, dt: float) -> float:
        """Forward-Euler step followed by clamping to the physical range."""
        low, high = self.value_range
        return clamp(value + derivative * dt, low, high)

    def get_info(self) -> Dict[str, Any]:
        """Get plant information."""
        return {
            'type': type(self).__name__,
            'name': self.name,
            'title': self.title,
            'description': self.description,
            'units': self.units,
            'range': self.value_range,
            'initial_value': self.initial_value,
            'initial_setpoint': self.initial_setpoint,
            'disturbance_frequency': self.disturbance_frequency,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
