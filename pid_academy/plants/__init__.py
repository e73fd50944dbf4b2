"""Plant models driven by the simulation loop."""

from typing import Dict

from pid_academy.plants.base_plant import (
    BasePlant,
    PlantState,
    DisturbanceTerms,
    INTEGRATION_STEP,
)
from pid_academy.plants.control_inputs import ControlInputs
from pid_academy.plants.car import CarPlant
from pid_academy.plants.drone import DronePlant
from pid_academy.plants.temperature import TemperaturePlant
from pid_academy.plants.pendulum import PendulumPlant
from pid_academy.utils.validators import ValidationError


PLANTS: Dict[str, BasePlant] = {
    plant.name: plant
    for plant in (CarPlant(), DronePlant(), TemperaturePlant(), PendulumPlant())
}


def get_plant(name: str) -> BasePlant:
    """Look up a plant by name ('car', 'drone', 'temperature', 'pendulum')."""
    try:
        return PLANTS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown plant: {name!r} (expected one of {', '.join(PLANTS)})"
        ) from None


__all__ = [
    "BasePlant",
    "PlantState",
    "DisturbanceTerms",
    "INTEGRATION_STEP",
    "ControlInputs",
    "CarPlant",
    "DronePlant",
    "TemperaturePlant",
    "PendulumPlant",
    "PLANTS",
    "get_plant",
]
