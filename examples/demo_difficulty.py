#!/usr/bin/env python3
"""
Difficulty Comparison Demo

Runs the same gains on every plant at every difficulty and prints
the resulting grades as a table.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from pid_academy.plants import PLANTS
from pid_academy.simulation.config import SimulationConfig
from pid_academy.simulation.difficulty import DIFFICULTY_PROFILES
from pid_academy.simulation.simulation_loop import SimulationLoop
from pid_academy.simulation.simulator import Simulator


GAINS = {
    'car': {'kp': 2.0, 'ki': 0.3, 'kd': 0.05},
    'drone': {'kp': 2.5, 'ki': 0.4, 'kd': 0.1},
    'temperature': {'kp': 3.0, 'ki': 0.5, 'kd': 0.02},
    'pendulum': {'kp': 2.0, 'ki': 0.1, 'kd': 0.2},
}


def main():
    print("=" * 70)
    print("Difficulty Comparison")
    print("=" * 70)

    header = f"{'plant':<14}" + "".join(f"{name:>14}" for name in DIFFICULTY_PROFILES)
    print(header)
    print("-" * len(header))

    for plant_name in PLANTS:
        cells = []
        for difficulty in DIFFICULTY_PROFILES:
            config = SimulationConfig(
                plant=plant_name,
                difficulty=difficulty,
                gains=GAINS[plant_name],
                seed=0
            )
            loop = SimulationLoop(config)
            # Pendulum starts balanced; give it something to do
            if plant_name == 'pendulum':
                loop.set_setpoint(10.0)
            result = Simulator(loop).run(duration=30.0)

            rms = float(np.sqrt(np.mean(result.errors ** 2)))
            cells.append(f"{result.final_grade} ({rms:5.2f})")
        print(f"{plant_name:<14}" + "".join(f"{c:>14}" for c in cells))

    print("\nGrade (RMS tracking error) after 30 s of simulated time")


if __name__ == "__main__":
    main()
