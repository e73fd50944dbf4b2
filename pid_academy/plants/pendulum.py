"""
Inverted pendulum plant.
Angle driven by a lateral force against gravity torque and damping.
"""

import math

from pid_academy.plants.base_plant import (
    BasePlant,
    PlantState,
    DisturbanceTerms,
    INTEGRATION_STEP,
)
from pid_academy.plants.control_inputs import ControlInputs


class PendulumPlant(BasePlant):
    """
    Inverted pendulum: angle in degrees from vertical, range [-75, 75].

    angle' = 0.08 * (u + manual + external)
             - 3 * sin(angle)
             - 0.08 * angle
             + noise
    """

    name = "pendulum"
    title = "Inverted Pendulum"
    description = "Use force buttons or arrow keys to disturb the pendulum!"
    units = "°"
    value_range = (-75.0, 75.0)
    initial_value = 0.0
    initial_setpoint = 0.0
    disturbance_frequency = 0.003

    FORCE_GAIN = 0.08
    GRAVITY_GAIN = 3.0
    DAMPING = 0.08
    BASE_OFFSET_GAIN = 0.5

    def manual_input(self, controls: ControlInputs) -> float:
        return controls.force

    def step(
        self,
        state: PlantState,
        controller_output: float,
        manual_input: float,
        disturbance: DisturbanceTerms,
        dt: float = INTEGRATION_STEP
    ) -> PlantState:
        drive = controller_output + manual_input + disturbance.periodic
        force = drive * self.FORCE_GAIN
        gravity = math.sin(math.radians(state.value)) * self.GRAVITY_GAIN
        damping = state.value * self.DAMPING

        value = self._integrate(state.value, force - gravity - damping + disturbance.noise, dt)
        return PlantState(
            value=value,
            drive=drive,
            aux={'base_offset': drive * self.BASE_OFFSET_GAIN}
        )
