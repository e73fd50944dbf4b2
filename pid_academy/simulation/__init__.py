"""Simulation loop, difficulty presets and drivers."""

from pid_academy.simulation.config import SimulationConfig
from pid_academy.simulation.difficulty import (
    DifficultyProfile,
    DIFFICULTY_PROFILES,
    get_difficulty,
)
from pid_academy.simulation.disturbance import DisturbanceGenerator
from pid_academy.simulation.simulation_loop import (
    SimulationLoop,
    LoopState,
    TickResult,
    SimulationSnapshot,
)
from pid_academy.simulation.simulator import (
    Simulator,
    AnimatedSimulator,
    SimulationResult,
)

__all__ = [
    "SimulationConfig",
    "DifficultyProfile",
    "DIFFICULTY_PROFILES",
    "get_difficulty",
    "DisturbanceGenerator",
    "SimulationLoop",
    "LoopState",
    "TickResult",
    "SimulationSnapshot",
    "Simulator",
    "AnimatedSimulator",
    "SimulationResult",
]
