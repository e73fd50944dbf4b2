"""Core PID controller components."""

from pid_academy.core.pid_controller import PIDController, PIDResult, INTEGRAL_LIMIT
from pid_academy.core.pid_params import PIDGains
from pid_academy.core.gain_advice import AdviceLevel, GainAdvice, assess_gain

__all__ = [
    "PIDController",
    "PIDResult",
    "INTEGRAL_LIMIT",
    "PIDGains",
    "AdviceLevel",
    "GainAdvice",
    "assess_gain",
]
