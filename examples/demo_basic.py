#!/usr/bin/env python3
"""
Basic PID Academy Demo

Demonstrates:
- Building a simulation loop from a config
- Headless run with a setpoint change
- Scores, grade and gain advice
- CSV tick logging and plotting
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pid_academy.analyzer.plots import SimulationPlotter
from pid_academy.core.gain_advice import assess_gain
from pid_academy.core.pid_params import PIDGains
from pid_academy.simulation.config import SimulationConfig
from pid_academy.simulation.simulation_loop import SimulationLoop
from pid_academy.simulation.simulator import Simulator


def main():
    print("=" * 60)
    print("Basic PID Academy Demo")
    print("=" * 60)

    Path("output").mkdir(exist_ok=True)

    config = SimulationConfig(
        plant="car",
        difficulty="medium",
        gains=PIDGains(kp=1.5, ki=0.2, kd=0.05),
        seed=42,
        csv_log_path="output/basic_demo.csv"
    )

    with SimulationLoop(config) as loop:
        print(f"\nPlant: {loop.plant.get_info()}")
        print(f"Controller: {loop.gains}")
        print(f"Difficulty: {loop.difficulty.to_dict()}")

        # Cruise at 60, then ask for 90 halfway through
        result = Simulator(loop).run(
            duration=40.0,
            setpoint_function=lambda t: 60.0 if t < 20.0 else 90.0
        )

        snapshot = loop.snapshot()

    print(f"\nSimulated {len(result)} ticks in {result.execution_time:.3f}s")
    print(f"Final speed: {result.values[-1]:.2f} km/h")

    print("\n" + "=" * 60)
    print("Performance")
    print("=" * 60)
    scores = result.final_scores
    print(f"  Stability: {scores.stability:.1f}")
    print(f"  Speed:     {scores.speed:.1f}")
    print(f"  Accuracy:  {scores.accuracy:.1f}")
    print(f"  Grade:     {scores.grade}")

    print("\nGain advice:")
    for name in ('kp', 'ki', 'kd'):
        advice = assess_gain(name, getattr(config.gains, name))
        print(f"  {name}: {advice.message}")

    print("\nSnapshot:")
    print(snapshot.to_json())

    plotter = SimulationPlotter()
    fig = plotter.plot_result(result, title="Car Cruise Control - Step to 90 km/h")
    plotter.save(fig, "output/basic_demo.png")
    print("\nSaved: output/basic_demo.csv, output/basic_demo.png")

    plotter.show()


if __name__ == "__main__":
    main()
