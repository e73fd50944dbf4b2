"""
Drone altitude plant.
Rotor thrust against constant gravity, buffeted by wind.
"""

from pid_academy.plants.base_plant import (
    BasePlant,
    PlantState,
    DisturbanceTerms,
    INTEGRATION_STEP,
)
from pid_academy.plants.control_inputs import ControlInputs


class DronePlant(BasePlant):
    """
    Altitude hold: altitude in metres, range [0, 100].

    altitude' = 0.03 * (u + manual + wind) - 9.8 * 0.008 + noise

    The throttle slider is centred at 50, so mid-stick adds no thrust.
    """

    name = "drone"
    title = "Drone Altitude Control"
    description = "Control the drone's altitude with the throttle slider!"
    units = "m"
    value_range = (0.0, 100.0)
    initial_value = 50.0
    initial_setpoint = 50.0
    disturbance_frequency = 0.002

    THRUST_GAIN = 0.03
    GRAVITY = 9.8 * 0.008
    THROTTLE_CENTER = 50.0
    THROTTLE_GAIN = 1.5
    HOVER_POWER = 50.0

    def manual_input(self, controls: ControlInputs) -> float:
        return (controls.throttle - self.THROTTLE_CENTER) * self.THROTTLE_GAIN

    def step(
        self,
        state: PlantState,
        controller_output: float,
        manual_input: float,
        disturbance: DisturbanceTerms,
        dt: float = INTEGRATION_STEP
    ) -> PlantState:
        drive = controller_output + manual_input + disturbance.periodic
        thrust = drive * self.THRUST_GAIN

        value = self._integrate(state.value, thrust - self.GRAVITY + disturbance.noise, dt)
        return PlantState(
            value=value,
            drive=drive,
            aux={'total_power': max(0.0, drive + self.HOVER_POWER)}
        )
