"""Shared fixtures for the test suite."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from pid_academy.simulation.difficulty import DifficultyProfile


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 0.0):
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> float:
        self.t += seconds
        return self.t


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def calm():
    """Profile with no noise and no periodic disturbance."""
    return DifficultyProfile('calm', noise=0.0, disturbance=0.0)
