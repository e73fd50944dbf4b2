"""
PID Controller Implementation.

A wall-clock driven PID controller:
- Proportional, Integral, Derivative terms reported separately
- Integral accumulator clamped to a fixed band (anti-windup)
- Derivative forced to zero when no time has elapsed
- Injectable clock for deterministic stepping
"""

from typing import Optional, Dict, Any, Callable
from dataclasses import dataclass, asdict
import time

from pid_academy.core.pid_params import PIDGains, DEFAULT_KP, DEFAULT_KI, DEFAULT_KD
from pid_academy.utils.math_utils import clamp


INTEGRAL_LIMIT = 50.0


@dataclass(frozen=True)
class PIDResult:
    """Output of a single controller update."""
    output: float = 0.0
    p_term: float = 0.0
    i_term: float = 0.0
    d_term: float = 0.0
    error: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return asdict(self)


class PIDController:
    """
    PID controller with integral clamping.

    Time between updates is measured from the controller's clock, so the
    integral and derivative terms follow real elapsed time regardless of
    how often ``update`` is called.

    Example:
        >>> pid = PIDController(kp=1.0, ki=0.0, kd=0.0)
        >>> result = pid.update(setpoint=60.0, current_value=30.0)
        >>> result.p_term
        30.0
    """

    def __init__(
        self,
        kp: float = DEFAULT_KP,
        ki: float = DEFAULT_KI,
        kd: float = DEFAULT_KD,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Initialize PID controller.

        Args:
            kp: Proportional gain
            ki: Integral gain
            kd: Derivative gain
            clock: Callable returning the current time in seconds
                   (defaults to time.perf_counter)
        """
        gains = PIDGains(kp, ki, kd)
        self.kp = gains.kp
        self.ki = gains.ki
        self.kd = gains.kd

        self._clock = clock if clock is not None else time.perf_counter

        self._integral: float = 0.0
        self._previous_error: float = 0.0
        self._last_update_time: float = self._clock()
        self._state = PIDResult()

    @property
    def gains(self) -> PIDGains:
        """Get current gains."""
        return PIDGains(self.kp, self.ki, self.kd)

    @property
    def state(self) -> PIDResult:
        """Result of the most recent update."""
        return self._state

    @property
    def integral(self) -> float:
        """Current integral accumulator (error x seconds)."""
        return self._integral

    @property
    def previous_error(self) -> float:
        return self._previous_error

    @property
    def last_update_time(self) -> float:
        return self._last_update_time

    def update(
        self,
        setpoint: float,
        current_value: float,
        now: Optional[float] = None
    ) -> PIDResult:
        """
        Update controller with new setpoint and measured value.

        Args:
            setpoint: Desired value
            current_value: Actual measured value
            now: Current time in seconds (read from the clock if None)

        Returns:
            PIDResult with the output and its three terms
        """
        if now is None:
            now = self._clock()

        delta_time = now - self._last_update_time
        error = setpoint - current_value

        p_term = self.kp * error

        # A clock that steps backwards must not unwind the integral
        self._integral += error * max(delta_time, 0.0)
        self._integral = clamp(self._integral, -INTEGRAL_LIMIT, INTEGRAL_LIMIT)
        i_term = self.ki * self._integral

        if delta_time > 0:
            derivative = (error - self._previous_error) / delta_time
        else:
            derivative = 0.0
        d_term = self.kd * derivative

        output = p_term + i_term + d_term

        self._previous_error = error
        self._last_update_time = now
        self._state = PIDResult(
            output=output,
            p_term=p_term,
            i_term=i_term,
            d_term=d_term,
            error=error
        )
        return self._state

    def set_parameters(self, kp: float, ki: float, kd: float) -> None:
        """
        Replace gains without touching accumulated state.

        Call ``reset`` afterwards to avoid a step in the output.

        Raises:
            ValidationError: If any gain is NaN or infinite
        """
        self.set_gains(PIDGains(kp, ki, kd))

    def set_gains(self, gains: PIDGains) -> None:
        """Replace gains from a PIDGains record."""
        self.kp = gains.kp
        self.ki = gains.ki
        self.kd = gains.kd

    def reset(self, now: Optional[float] = None) -> None:
        """Zero the integral and previous error and restamp the update time."""
        self._integral = 0.0
        self._previous_error = 0.0
        self._last_update_time = now if now is not None else self._clock()
        self._state = PIDResult()

    def __repr__(self) -> str:
        return f"PIDController({self.gains})"
