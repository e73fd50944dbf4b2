"""
Validation utilities for command and configuration checking.
Provides input validation with clear error messages.
"""

from typing import Any, Iterable, Optional
import math
import numbers


class ValidationError(ValueError):
    """Raised when a command or configuration value is rejected."""
    pass


def validate_finite(value: float, name: str) -> float:
    """
    Validate that a value is a finite real number.
    
    Args:
        value: The value to validate
        name: Parameter name for error messages
        
    Returns:
        The validated value as float
        
    Raises:
        ValidationError: If value is not real, or is NaN or infinite
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{name} must be a real number, got {type(value).__name__}")
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    return value


def validate_positive(value: float, name: str) -> float:
    """Validate that a value is finite and strictly positive."""
    value = validate_finite(value, name)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_range(
    value: float,
    name: str,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None
) -> float:
    """
    Validate that a value falls within an inclusive range.
    
    Args:
        value: The value to validate
        name: Parameter name for error messages
        min_val: Minimum allowed value (None for no lower bound)
        max_val: Maximum allowed value (None for no upper bound)
        
    Returns:
        The validated value
        
    Raises:
        ValidationError: If value is outside the range
    """
    value = validate_finite(value, name)
    
    if min_val is not None and value < min_val:
        raise ValidationError(f"{name} must be >= {min_val}, got {value}")
    if max_val is not None and value > max_val:
        raise ValidationError(f"{name} must be <= {max_val}, got {value}")
    
    return value


def validate_choice(value: Any, name: str, choices: Iterable[Any]) -> Any:
    """
    Validate that a value is one of an allowed set.
    
    Raises:
        ValidationError: If value is not among choices
    """
    choices = list(choices)
    if value not in choices:
        allowed = ", ".join(repr(c) for c in choices)
        raise ValidationError(f"{name} must be one of {allowed}, got {value!r}")
    return value
