"""
Noise and periodic disturbance injected into each plant step.
"""

from typing import Optional
import math

import numpy as np

from pid_academy.plants.base_plant import BasePlant, DisturbanceTerms
from pid_academy.simulation.difficulty import DifficultyProfile


class DisturbanceGenerator:
    """
    Produces the per-tick disturbance terms.

    noise    = (U[0, 1) - 0.5) * profile.noise
    periodic = sin(elapsed_ms * plant.disturbance_frequency) * profile.disturbance

    Noise is drawn independently each tick from a numpy Generator; pass a
    seed for reproducible runs. The periodic term depends only on elapsed
    time, so the same instant always yields the same value.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        """
        Args:
            seed: Seed for a fresh generator (ignored if rng is given)
            rng: Generator to draw noise from
        """
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def noise(self, profile: DifficultyProfile) -> float:
        """Draw one uniform noise sample."""
        return (float(self._rng.random()) - 0.5) * profile.noise

    @staticmethod
    def periodic(elapsed_ms: float, profile: DifficultyProfile, plant: BasePlant) -> float:
        """Periodic disturbance at the given elapsed time (milliseconds)."""
        return math.sin(elapsed_ms * plant.disturbance_frequency) * profile.disturbance

    def sample(
        self,
        elapsed_ms: float,
        profile: DifficultyProfile,
        plant: BasePlant
    ) -> DisturbanceTerms:
        """
        Draw the disturbance terms for one tick.

        Args:
            elapsed_ms: Milliseconds since the session started
            profile: Active difficulty profile
            plant: Active plant (sets the disturbance frequency)
        """
        return DisturbanceTerms(
            noise=self.noise(profile),
            periodic=self.periodic(elapsed_ms, profile, plant)
        )
