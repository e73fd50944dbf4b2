#!/usr/bin/env python3
"""
Run a PID Academy session from the command line.

Usage:
    python simulate.py [options]

Examples:
    python simulate.py --plant drone --kp 2.0 --ki 0.2
    python simulate.py --plant temperature --difficulty hard --duration 120
    python simulate.py --plant pendulum --setpoint 10 --save output/
    python simulate.py --plant car --live
"""

import argparse
import sys
from pathlib import Path

from pid_academy.core.gain_advice import assess_gain
from pid_academy.core.pid_params import DEFAULT_KP, DEFAULT_KI, DEFAULT_KD
from pid_academy.plants import PLANTS
from pid_academy.simulation.config import SimulationConfig
from pid_academy.simulation.difficulty import DIFFICULTY_PROFILES
from pid_academy.simulation.simulation_loop import SimulationLoop
from pid_academy.simulation.simulator import Simulator, AnimatedSimulator
from pid_academy.utils.validators import ValidationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Run a PID tuning session against one of the training plants',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --plant drone --kp 2.0 --ki 0.2
  %(prog)s --plant temperature --difficulty hard --duration 120
  %(prog)s --plant pendulum --setpoint 10 --save output/
  %(prog)s --plant car --live
        """
    )

    parser.add_argument(
        '--plant',
        choices=sorted(PLANTS),
        default='car',
        help='Plant to control (default: car)'
    )

    parser.add_argument(
        '--difficulty',
        choices=list(DIFFICULTY_PROFILES),
        default='easy',
        help='Noise and disturbance preset (default: easy)'
    )

    parser.add_argument('--kp', type=float, default=DEFAULT_KP, help='Proportional gain')
    parser.add_argument('--ki', type=float, default=DEFAULT_KI, help='Integral gain')
    parser.add_argument('--kd', type=float, default=DEFAULT_KD, help='Derivative gain')

    parser.add_argument(
        '--setpoint',
        type=float,
        help="Target value (default: the plant's initial setpoint)"
    )

    parser.add_argument(
        '-d', '--duration',
        type=float,
        default=30.0,
        help='Seconds of simulated time (default: 30)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        help='Seed for reproducible noise'
    )

    parser.add_argument(
        '--log',
        type=str,
        metavar='FILE',
        help='Write every tick to a CSV file'
    )

    parser.add_argument(
        '--live',
        action='store_true',
        help='Open the animated window instead of running headless'
    )

    parser.add_argument(
        '--save',
        type=str,
        metavar='DIR',
        help='Save the result plot to a directory instead of displaying it'
    )

    parser.add_argument(
        '--no-plot',
        action='store_true',
        help='Print scores only'
    )

    parser.add_argument(
        '--dpi',
        type=int,
        default=150,
        help='DPI for saved figures (default: 150)'
    )

    return parser


def print_advice(kp: float, ki: float, kd: float) -> None:
    print("Gain advice:")
    for name, value in (('kp', kp), ('ki', ki), ('kd', kd)):
        advice = assess_gain(name, value)
        print(f"  {name} = {value:<8g} [{advice.level.value:>7}] {advice.message}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = SimulationConfig(
            plant=args.plant,
            difficulty=args.difficulty,
            gains={'kp': args.kp, 'ki': args.ki, 'kd': args.kd},
            seed=args.seed,
            csv_log_path=args.log
        )
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with SimulationLoop(config) as loop:
        if args.setpoint is not None:
            try:
                loop.set_setpoint(args.setpoint, now=loop.session_start)
            except ValidationError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1

        print(f"Plant: {loop.plant.title} ({loop.plant.units})")
        print(f"Difficulty: {loop.difficulty.name}")
        print(f"Controller: {loop.gains}")
        print(f"Setpoint: {loop.setpoint:g}")
        print()

        if args.live:
            AnimatedSimulator(loop).run_animated(duration=args.duration)
            return 0

        result = Simulator(loop).run(duration=args.duration)

    scores = result.final_scores
    print(f"Simulated {len(result)} ticks in {result.execution_time:.3f}s")
    print(f"Final value: {result.values[-1]:.2f}")
    print(f"Stability: {scores.stability:5.1f}")
    print(f"Speed:     {scores.speed:5.1f}")
    print(f"Accuracy:  {scores.accuracy:5.1f}")
    print(f"Grade:     {scores.grade}")
    print()
    print_advice(args.kp, args.ki, args.kd)

    if args.log:
        print(f"\nTick log written to: {args.log}")

    if args.no_plot:
        return 0

    from pid_academy.analyzer.plots import SimulationPlotter

    plotter = SimulationPlotter()
    fig = plotter.plot_result(result)

    if args.save:
        save_dir = Path(args.save)
        save_dir.mkdir(parents=True, exist_ok=True)
        filepath = save_dir / f"{args.plant}_{args.difficulty}.png"
        plotter.save(fig, str(filepath), dpi=args.dpi)
        print(f"Saved: {filepath}")
    else:
        plotter.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())
