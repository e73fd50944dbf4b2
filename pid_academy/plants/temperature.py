"""
Room temperature plant.
Heater-only input with Newtonian cooling toward a drifting ambient.
"""

from pid_academy.plants.base_plant import (
    BasePlant,
    PlantState,
    DisturbanceTerms,
    INTEGRATION_STEP,
)
from pid_academy.plants.control_inputs import ControlInputs


class TemperaturePlant(BasePlant):
    """
    Temperature control: degrees Celsius, range [0, 100].

    The heater cannot cool, so negative combined input is cut to zero.
    The periodic disturbance moves the ambient temperature rather than
    the heater input.

    temp' = 0.015 * max(0, u + manual) - 0.012 * (temp - (20 + periodic)) + noise
    """

    name = "temperature"
    title = "Temperature Control System"
    description = "Adjust the manual heater and watch PID maintain temperature!"
    units = "°C"
    value_range = (0.0, 100.0)
    initial_value = 20.0
    initial_setpoint = 25.0
    disturbance_frequency = 0.0005

    HEATING_GAIN = 0.015
    COOLING_COEFFICIENT = 0.012
    AMBIENT = 20.0
    HEATER_GAIN = 0.8

    def manual_input(self, controls: ControlInputs) -> float:
        return controls.heater * self.HEATER_GAIN

    def step(
        self,
        state: PlantState,
        controller_output: float,
        manual_input: float,
        disturbance: DisturbanceTerms,
        dt: float = INTEGRATION_STEP
    ) -> PlantState:
        drive = max(0.0, controller_output + manual_input)
        heating = drive * self.HEATING_GAIN
        ambient = self.AMBIENT + disturbance.periodic
        cooling = (state.value - ambient) * self.COOLING_COEFFICIENT

        value = self._integrate(state.value, heating - cooling + disturbance.noise, dt)
        return PlantState(value=value, drive=drive, aux={'ambient': ambient})
