#!/usr/bin/env python3
"""
Live PID Academy Demo

Animated drone altitude session with a scripted throttle gust and a
setpoint that steps every ten seconds.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import matplotlib.pyplot as plt

from pid_academy.simulation.config import SimulationConfig
from pid_academy.simulation.simulation_loop import SimulationLoop
from pid_academy.simulation.simulator import AnimatedSimulator


SETPOINTS = (50.0, 70.0, 30.0, 60.0)


def main():
    print("=" * 60)
    print("Live Drone Simulation")
    print("=" * 60)
    print("\nUse the Pause button to freeze the session. Close the window to finish.\n")

    loop = SimulationLoop(SimulationConfig(
        plant="drone",
        difficulty="medium",
        gains={'kp': 2.5, 'ki': 0.4, 'kd': 0.1}
    ))

    state = {'index': 0, 'last_change': 0.0}

    def on_tick(result):
        gust = 15.0 <= result.time < 18.0
        if gust != (loop.controls.throttle != 50.0):
            loop.set_controls(throttle=80.0 if gust else 50.0)

        if result.time - state['last_change'] >= 10.0:
            state['index'] = (state['index'] + 1) % len(SETPOINTS)
            state['last_change'] = result.time
            loop.set_setpoint(SETPOINTS[state['index']])
            print(f"  t={result.time:5.1f}s  setpoint -> {loop.setpoint:g}  "
                  f"grade {result.grade}")

    sim = AnimatedSimulator(loop, on_tick=on_tick)
    sim.run_animated(duration=40.0)

    scores = loop.scores
    print(f"\nFinal grade: {scores.grade} (overall {scores.overall:.1f})")
    plt.close('all')


if __name__ == "__main__":
    main()
