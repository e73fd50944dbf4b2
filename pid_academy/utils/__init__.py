"""Utility functions and helpers."""

from pid_academy.utils.validators import (
    ValidationError,
    validate_finite,
    validate_positive,
    validate_range,
    validate_choice,
)
from pid_academy.utils.math_utils import clamp, exponential_smooth, mean

__all__ = [
    "ValidationError",
    "validate_finite",
    "validate_positive",
    "validate_range",
    "validate_choice",
    "clamp",
    "mean",
    "exponential_smooth",
]
