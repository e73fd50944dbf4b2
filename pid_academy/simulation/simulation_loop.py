"""
Simulation loop coupling the PID controller to the active plant.

A SimulationLoop is the whole simulation context: controller, plant state,
difficulty, raw inputs, history and scores. The host application drives
it by calling ``tick`` once per frame and changes it only through the
command methods; nothing here reaches back into the presentation layer.
"""

from typing import Optional, Dict, Any, Callable, Union
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
import json
import time

from pid_academy.analyzer.scoring import PerformanceScorer, ScoreCard, grade_for
from pid_academy.core.pid_controller import PIDController, PIDResult
from pid_academy.core.pid_params import PIDGains
from pid_academy.logging.csv_logger import TickLogger
from pid_academy.logging.history import HistoryBuffer, HistorySample
from pid_academy.plants import get_plant
from pid_academy.plants.base_plant import BasePlant, PlantState
from pid_academy.plants.control_inputs import ControlInputs
from pid_academy.simulation.config import SimulationConfig
from pid_academy.simulation.difficulty import DifficultyProfile, get_difficulty
from pid_academy.simulation.disturbance import DisturbanceGenerator
from pid_academy.utils.validators import ValidationError, validate_finite


class LoopState(Enum):
    """Run state of the loop."""
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class TickResult:
    """Everything one tick produced."""
    time: float
    setpoint: float
    output: float
    p_term: float
    i_term: float
    d_term: float
    error: float
    manual_input: float
    state: PlantState
    stability_score: float
    speed_score: float
    accuracy_score: float
    overall_score: float
    grade: str
    xp_earned: int = 0

    @property
    def value(self) -> float:
        """Plant value after this tick."""
        return self.state.value

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['state'] = self.state.to_dict()
        data['value'] = self.value
        return data


@dataclass
class SimulationSnapshot:
    """
    Serializable view of the tunable settings and current scores.
    """
    kp: float
    ki: float
    kd: float
    setpoint: float
    difficulty: str
    plant: str
    timestamp: str = ""
    performance: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationSnapshot':
        return cls(
            kp=data['kp'],
            ki=data['ki'],
            kd=data['kd'],
            setpoint=data['setpoint'],
            difficulty=data['difficulty'],
            plant=data.get('plant', data.get('system')),
            timestamp=data.get('timestamp', ""),
            performance=dict(data.get('performance', {}))
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'SimulationSnapshot':
        return cls.from_dict(json.loads(json_str))


class SimulationLoop:
    """
    Two-state (running/paused) simulation engine.

    Plant dynamics advance by a fixed ``integration_step`` per tick, while
    the controller integrates and differentiates over real elapsed time
    between ticks. The plant constants were tuned for roughly 60 ticks per
    second.

    Example:
        >>> loop = SimulationLoop(SimulationConfig(plant="car"))
        >>> loop.set_gains(1.2, 0.1, 0.05)
        >>> result = loop.tick()
        >>> 0.0 <= result.value <= 150.0
        True
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        disturbance: Optional[DisturbanceGenerator] = None
    ):
        """
        Initialize simulation loop.

        Args:
            config: Simulation settings (defaults if None)
            clock: Callable returning the current time in seconds
                   (defaults to time.perf_counter)
            disturbance: Disturbance generator (seeded from config if None)
        """
        self._config = config if config is not None else SimulationConfig()
        self._clock = clock if clock is not None else time.perf_counter

        gains = self._config.gains
        self._pid = PIDController(gains.kp, gains.ki, gains.kd, clock=self._clock)
        self._disturbance = disturbance or DisturbanceGenerator(seed=self._config.seed)
        self._scorer = PerformanceScorer()
        self._history = HistoryBuffer(self._config.history_capacity)

        self._difficulty = get_difficulty(self._config.difficulty)
        self._plant: BasePlant = get_plant(self._config.plant)
        self._plant_state = self._plant.initial_state()
        self._setpoint = self._plant.initial_setpoint
        self._controls = ControlInputs()
        self._run_state = LoopState.RUNNING
        self._session_start = self._clock()
        self._tick_count = 0
        self._last_result: Optional[TickResult] = None
        self._last_tick_time: Optional[float] = None

        self._logger: Optional[TickLogger] = None
        if self._config.csv_log_path is not None:
            self._logger = TickLogger(self._config.csv_log_path)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def controller(self) -> PIDController:
        return self._pid

    @property
    def plant(self) -> BasePlant:
        """Active plant model."""
        return self._plant

    @property
    def plant_state(self) -> PlantState:
        return self._plant_state

    @property
    def current_value(self) -> float:
        return self._plant_state.value

    @property
    def setpoint(self) -> float:
        return self._setpoint

    @property
    def gains(self) -> PIDGains:
        return self._pid.gains

    @property
    def difficulty(self) -> DifficultyProfile:
        return self._difficulty

    @property
    def controls(self) -> ControlInputs:
        return self._controls

    @property
    def history(self) -> HistoryBuffer:
        return self._history

    @property
    def scores(self) -> ScoreCard:
        return self._scorer.scores

    @property
    def run_state(self) -> LoopState:
        return self._run_state

    @property
    def is_paused(self) -> bool:
        return self._run_state is LoopState.PAUSED

    @property
    def session_start(self) -> float:
        return self._session_start

    @property
    def tick_count(self) -> int:
        """Ticks processed since the loop was created."""
        return self._tick_count

    @property
    def last_result(self) -> Optional[TickResult]:
        return self._last_result

    @property
    def last_tick_time(self) -> Optional[float]:
        """Clock time of the most recent tick since the last restart."""
        return self._last_tick_time

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_gains(self, kp: float, ki: float, kd: float, now: Optional[float] = None) -> None:
        """
        Replace controller gains and reset controller state.

        Args:
            kp, ki, kd: New gains
            now: Time to restamp the controller with (clock if None)

        Raises:
            ValidationError: If any gain is NaN or infinite
        """
        self._pid.set_parameters(kp, ki, kd)
        self._pid.reset(now)

    def set_setpoint(self, setpoint: float, now: Optional[float] = None) -> None:
        """
        Change the target value and reset the controller.

        Hosts that pass explicit times to ``tick`` should pass the time of
        the last tick as ``now`` so the next tick sees one frame of dt.
        """
        self._setpoint = validate_finite(setpoint, "setpoint")
        self._pid.reset(now)

    def set_difficulty(self, difficulty: Union[str, DifficultyProfile]) -> None:
        """Select a difficulty preset by name or supply a custom profile."""
        self._difficulty = get_difficulty(difficulty)

    def set_active_plant(self, name: str, now: Optional[float] = None) -> None:
        """
        Switch to another plant.

        Restores that plant's initial value and setpoint and clears history,
        scores, controls and controller state.
        """
        self._plant = get_plant(name)
        self._setpoint = self._plant.initial_setpoint
        self._restart(now)

    def set_controls(self, controls: Optional[ControlInputs] = None, **changes) -> None:
        """
        Update the raw control surface state.

        Args:
            controls: Complete replacement inputs
            **changes: Individual fields to change on the current inputs
        """
        if controls is not None and not isinstance(controls, ControlInputs):
            raise ValidationError("controls must be a ControlInputs instance")
        base = controls if controls is not None else self._controls
        self._controls = base.copy(**changes) if changes else base

    def pause(self) -> None:
        self._run_state = LoopState.PAUSED

    def resume(self) -> None:
        self._run_state = LoopState.RUNNING

    def toggle_pause(self) -> bool:
        """Flip between running and paused; returns True if now paused."""
        if self.is_paused:
            self.resume()
        else:
            self.pause()
        return self.is_paused

    def reset(self, now: Optional[float] = None) -> None:
        """Return the active plant to its initial value, keeping the setpoint."""
        self._restart(now)

    def _restart(self, now: Optional[float] = None) -> None:
        self._session_start = now if now is not None else self._clock()
        self._pid.reset(self._session_start)
        self._history.clear()
        self._plant_state = self._plant.initial_state()
        self._controls = ControlInputs()
        self._scorer.reset()
        self._last_result = None
        self._last_tick_time = None

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, now: Optional[float] = None) -> Optional[TickResult]:
        """
        Advance the simulation by one step.

        Args:
            now: Current time in seconds (read from the clock if None)

        Returns:
            TickResult, or None while paused
        """
        if self.is_paused:
            return None

        if now is None:
            now = self._clock()
        elapsed = now - self._session_start

        pid_result: PIDResult = self._pid.update(self._setpoint, self._plant_state.value, now)

        manual_input = self._plant.manual_input(self._controls)
        disturbance = self._disturbance.sample(elapsed * 1000.0, self._difficulty, self._plant)

        self._plant_state = self._plant.step(
            self._plant_state,
            pid_result.output,
            manual_input,
            disturbance,
            self._config.integration_step
        )

        self._history.append(HistorySample(
            time=elapsed,
            setpoint=self._setpoint,
            value=self._plant_state.value,
            output=pid_result.output,
            manual_input=manual_input
        ))

        card = self._scorer.update(
            pid_result.error,
            self._setpoint,
            elapsed,
            self._difficulty.xp_multiplier
        )

        result = TickResult(
            time=elapsed,
            setpoint=self._setpoint,
            output=pid_result.output,
            p_term=pid_result.p_term,
            i_term=pid_result.i_term,
            d_term=pid_result.d_term,
            error=pid_result.error,
            manual_input=manual_input,
            state=self._plant_state,
            stability_score=card.stability,
            speed_score=card.speed,
            accuracy_score=card.accuracy,
            overall_score=card.overall,
            grade=card.grade,
            xp_earned=card.xp_earned
        )

        if self._logger is not None:
            self._logger.log(result, self._tick_count, self._plant.name, self._difficulty.name)

        self._tick_count += 1
        self._last_result = result
        self._last_tick_time = now
        return result

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> SimulationSnapshot:
        """Capture gains, setpoint, selections and current scores."""
        gains = self._pid.gains
        scores = self._scorer.scores
        return SimulationSnapshot(
            kp=gains.kp,
            ki=gains.ki,
            kd=gains.kd,
            setpoint=self._setpoint,
            difficulty=self._difficulty.name,
            plant=self._plant.name,
            timestamp=datetime.now(timezone.utc).isoformat(),
            performance={
                'stability': scores.stability,
                'speed': scores.speed,
                'accuracy': scores.accuracy,
                'grade': grade_for(scores.overall),
            }
        )

    def apply_snapshot(self, snapshot: SimulationSnapshot, now: Optional[float] = None) -> None:
        """Restore plant, difficulty, gains and setpoint from a snapshot."""
        self.set_active_plant(snapshot.plant, now)
        self.set_difficulty(snapshot.difficulty)
        self.set_gains(snapshot.kp, snapshot.ki, snapshot.kd, self._session_start)
        self.set_setpoint(snapshot.setpoint, self._session_start)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def flush_log(self) -> None:
        """Flush any buffered tick log rows to disk."""
        if self._logger is not None:
            self._logger.flush()

    def close(self) -> None:
        """Close the tick log."""
        if self._logger is not None:
            self._logger.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return (
            f"SimulationLoop(plant={self._plant.name!r}, "
            f"difficulty={self._difficulty.name!r}, {self._pid.gains}, "
            f"state={self._run_state.value})"
        )
