"""
PID Academy Simulation Core
===========================

Numerical engine behind an interactive PID tuning game:
- PID controller with integral clamping and real-time derivative
- Car, drone, temperature and inverted pendulum plants
- Difficulty-scaled noise and periodic disturbances
- Fixed-rate simulation loop with bounded chart history
- Smoothed stability/speed/accuracy scoring with letter grades
"""

from pid_academy.core.pid_controller import PIDController
from pid_academy.core.pid_params import PIDGains
from pid_academy.plants import ControlInputs, get_plant
from pid_academy.simulation.config import SimulationConfig
from pid_academy.simulation.simulation_loop import SimulationLoop, TickResult
from pid_academy.simulation.simulator import Simulator
from pid_academy.analyzer.scoring import PerformanceScorer

__version__ = "1.0.0"
__all__ = [
    "PIDController",
    "PIDGains",
    "ControlInputs",
    "get_plant",
    "SimulationConfig",
    "SimulationLoop",
    "TickResult",
    "Simulator",
    "PerformanceScorer",
]
