"""
Drivers that schedule ticks on a SimulationLoop.
Provides a headless fixed-rate runner and a live matplotlib animation.
"""

from typing import Callable, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
import time

import numpy as np

from pid_academy.analyzer.scoring import ScoreCard
from pid_academy.plants.control_inputs import ControlInputs
from pid_academy.simulation.simulation_loop import SimulationLoop, TickResult


DEFAULT_TICK_RATE = 60.0


@dataclass
class SimulationResult:
    """Container for a headless run."""
    timestamps: np.ndarray
    setpoints: np.ndarray
    values: np.ndarray
    outputs: np.ndarray
    errors: np.ndarray
    p_terms: np.ndarray
    i_terms: np.ndarray
    d_terms: np.ndarray
    manual_inputs: np.ndarray
    stability_scores: np.ndarray
    speed_scores: np.ndarray
    accuracy_scores: np.ndarray
    grades: List[str] = field(default_factory=list)

    # Metadata
    plant: str = ""
    difficulty: str = ""
    final_scores: Optional[ScoreCard] = None
    execution_time: float = 0.0

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def final_grade(self) -> str:
        return self.grades[-1] if self.grades else 'F'

    def to_dict(self) -> Dict[str, np.ndarray]:
        """Convert to dictionary format."""
        return {
            'timestamp': self.timestamps,
            'setpoint': self.setpoints,
            'value': self.values,
            'output': self.outputs,
            'error': self.errors,
            'p_term': self.p_terms,
            'i_term': self.i_terms,
            'd_term': self.d_terms,
            'manual_input': self.manual_inputs,
            'stability': self.stability_scores,
            'speed': self.speed_scores,
            'accuracy': self.accuracy_scores,
        }

    @classmethod
    def from_ticks(cls, ticks: List[TickResult], **metadata) -> 'SimulationResult':
        def col(name: str) -> np.ndarray:
            return np.array([getattr(t, name) for t in ticks], dtype=float)

        return cls(
            timestamps=col('time'),
            setpoints=col('setpoint'),
            values=col('value'),
            outputs=col('output'),
            errors=col('error'),
            p_terms=col('p_term'),
            i_terms=col('i_term'),
            d_terms=col('d_term'),
            manual_inputs=col('manual_input'),
            stability_scores=col('stability_score'),
            speed_scores=col('speed_score'),
            accuracy_scores=col('accuracy_score'),
            grades=[t.grade for t in ticks],
            **metadata
        )


class Simulator:
    """
    Headless driver that ticks a loop at a fixed synthetic rate.

    Time is simulated, not waited for: tick ``i`` is stamped
    ``start + i / tick_rate`` so runs are fast and repeatable.

    Example:
        >>> loop = SimulationLoop(SimulationConfig(plant="drone", seed=1))
        >>> result = Simulator(loop).run(duration=10.0)
        >>> result.final_grade in "ABCDF"
        True
    """

    def __init__(self, loop: SimulationLoop):
        self._loop = loop

    @property
    def loop(self) -> SimulationLoop:
        return self._loop

    def run(
        self,
        duration: float,
        tick_rate: float = DEFAULT_TICK_RATE,
        setpoint_function: Optional[Callable[[float], float]] = None,
        controls_function: Optional[Callable[[float], ControlInputs]] = None,
        start_time: Optional[float] = None
    ) -> SimulationResult:
        """
        Run the loop for a span of simulated time.

        Args:
            duration: Seconds of simulated time
            tick_rate: Ticks per simulated second
            setpoint_function: Optional f(t) giving the setpoint; applied
                               only when its value changes
            controls_function: Optional f(t) giving the raw inputs
            start_time: Clock reading the run counts from (defaults to the
                        loop's last tick, or its session start before
                        the first tick)

        Returns:
            SimulationResult with one entry per non-paused tick
        """
        if duration <= 0:
            raise ValueError("duration must be positive")
        if tick_rate <= 0:
            raise ValueError("tick_rate must be positive")

        wall_start = time.perf_counter()
        t0 = start_time
        if t0 is None:
            last = self._loop.last_tick_time
            t0 = last if last is not None else self._loop.session_start
        n_ticks = int(round(duration * tick_rate))

        ticks: List[TickResult] = []
        for i in range(1, n_ticks + 1):
            t = i / tick_rate

            if setpoint_function is not None:
                setpoint = setpoint_function(t)
                if setpoint != self._loop.setpoint:
                    # Stamp the reset at the previous frame so dt stays one frame
                    self._loop.set_setpoint(setpoint, now=t0 + (i - 1) / tick_rate)
            if controls_function is not None:
                self._loop.set_controls(controls_function(t))

            result = self._loop.tick(now=t0 + t)
            if result is not None:
                ticks.append(result)

        self._loop.flush_log()

        return SimulationResult.from_ticks(
            ticks,
            plant=self._loop.plant.name,
            difficulty=self._loop.difficulty.name,
            final_scores=self._loop.scores,
            execution_time=time.perf_counter() - wall_start
        )


class AnimatedSimulator:
    """
    Live driver that ticks the loop from a matplotlib animation timer.

    Each animation frame runs one tick, so the frame interval sets the
    tick rate. A Pause button toggles the loop's run state.
    """

    def __init__(
        self,
        loop: SimulationLoop,
        interval_ms: int = 16,
        on_tick: Optional[Callable[[TickResult], None]] = None
    ):
        """
        Args:
            loop: Loop to drive
            interval_ms: Frame interval (16 ms is about 60 Hz)
            on_tick: Called with every non-paused TickResult
        """
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._loop = loop
        self._interval_ms = interval_ms
        self._on_tick = on_tick

    def run_animated(
        self,
        duration: float = 30.0,
        figsize: Tuple[int, int] = (12, 8)
    ):
        """
        Show the live chart until the window closes or duration elapses.

        Args:
            duration: Seconds of animation
            figsize: Figure size

        Returns:
            The FuncAnimation driving the window
        """
        import matplotlib.pyplot as plt
        from matplotlib.animation import FuncAnimation
        from matplotlib.widgets import Button

        loop = self._loop
        history = loop.history
        plant = loop.plant

        fig, (ax_resp, ax_score) = plt.subplots(2, 1, figsize=figsize)
        fig.subplots_adjust(bottom=0.12)
        fig.suptitle(f"Live Simulation: {plant.title}", fontsize=14)

        line_sp, = ax_resp.plot([], [], 'g--', label='Setpoint')
        line_val, = ax_resp.plot([], [], 'b-', label=f'Value ({plant.units})')
        line_out, = ax_resp.plot([], [], 'm-', alpha=0.6, label='PID output')
        line_man, = ax_resp.plot([], [], 'r:', alpha=0.6, label='Manual input')
        ax_resp.set_ylabel('Value')
        ax_resp.legend(loc='upper left')
        ax_resp.grid(True, alpha=0.3)

        bars = ax_score.bar(['Stability', 'Speed', 'Accuracy'], [0, 0, 0],
                            color=['#1abc9c', '#f39c12', '#3498db'])
        ax_score.set_ylim(0, 100)
        ax_score.set_ylabel('Score')
        grade_text = ax_score.text(0.98, 0.85, '', transform=ax_score.transAxes,
                                   ha='right', fontsize=20, fontweight='bold')

        ax_pause = fig.add_axes([0.85, 0.01, 0.1, 0.05])
        btn_pause = Button(ax_pause, 'Pause')

        def toggle(event):
            btn_pause.label.set_text('Resume' if loop.toggle_pause() else 'Pause')

        btn_pause.on_clicked(toggle)

        artists = [line_sp, line_val, line_out, line_man, *bars, grade_text]
        n_frames = int(duration * 1000 / self._interval_ms)

        def animate(frame):
            result = loop.tick()
            if result is None:
                return artists

            t = history.column('time')
            line_sp.set_data(t, history.column('setpoint'))
            line_val.set_data(t, history.column('value'))
            line_out.set_data(t, history.column('output'))
            line_man.set_data(t, history.column('manual_input'))
            ax_resp.relim()
            ax_resp.autoscale_view()

            for bar, score in zip(bars, (result.stability_score,
                                         result.speed_score,
                                         result.accuracy_score)):
                bar.set_height(score)
            grade_text.set_text(result.grade)

            if self._on_tick is not None:
                self._on_tick(result)
            return artists

        anim = FuncAnimation(
            fig, animate, frames=n_frames,
            interval=self._interval_ms, blit=False, repeat=False
        )

        plt.show()
        loop.flush_log()
        return anim
