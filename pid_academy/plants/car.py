"""
Car cruise control plant.
Speed driven by engine force against linear aerodynamic drag.
"""

from pid_academy.plants.base_plant import (
    BasePlant,
    PlantState,
    DisturbanceTerms,
    INTEGRATION_STEP,
)
from pid_academy.plants.control_inputs import ControlInputs


class CarPlant(BasePlant):
    """
    Cruise control: speed in km/h, range [0, 150].

    speed' = 0.08 * (u + manual + periodic) - 0.025 * speed + noise
    """

    name = "car"
    title = "Car Cruise Control"
    description = "Use gas and brake pedals to test your cruise control system!"
    units = "km/h"
    value_range = (0.0, 150.0)
    initial_value = 30.0
    initial_setpoint = 60.0
    disturbance_frequency = 0.001

    ACCELERATION_GAIN = 0.08
    DRAG_COEFFICIENT = 0.025
    GAS_INPUT = 60.0
    BRAKE_INPUT = -40.0

    def manual_input(self, controls: ControlInputs) -> float:
        manual = 0.0
        if controls.gas:
            manual += self.GAS_INPUT
        if controls.brake:
            manual += self.BRAKE_INPUT
        return manual

    def step(
        self,
        state: PlantState,
        controller_output: float,
        manual_input: float,
        disturbance: DisturbanceTerms,
        dt: float = INTEGRATION_STEP
    ) -> PlantState:
        drive = controller_output + manual_input + disturbance.periodic
        acceleration = drive * self.ACCELERATION_GAIN
        drag = state.value * self.DRAG_COEFFICIENT

        value = self._integrate(state.value, acceleration - drag + disturbance.noise, dt)
        return PlantState(value=value, drive=drive)
