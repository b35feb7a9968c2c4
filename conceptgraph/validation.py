"""
Validation Module
=================

Input validation utilities for configuration records and profiles.

Validators raise ConfigurationError (a ValueError subclass) so that
dataclass ``__post_init__`` hooks can reject structurally invalid
values before any invariant repair is attempted.
"""

import math
from typing import Any, Optional

from .errors import ConfigurationError


def validate_non_empty_string(value: Any, param_name: str) -> None:
    """
    Validate that a value is a non-empty string.

    Args:
        value: The value to validate
        param_name: Name of the parameter (for error messages)

    Raises:
        ConfigurationError: If value is not a non-empty string
    """
    if not isinstance(value, str):
        raise ConfigurationError(
            f"{param_name} must be a string, got {type(value).__name__}",
            param=param_name
        )
    if not value.strip():
        raise ConfigurationError(f"{param_name} must be a non-empty string", param=param_name)


def validate_finite(value: Any, param_name: str) -> None:
    """
    Validate that a value is a finite real number.

    Args:
        value: The value to validate
        param_name: Name of the parameter (for error messages)

    Raises:
        ConfigurationError: If value is not numeric, or is NaN/infinite
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(
            f"{param_name} must be numeric, got {type(value).__name__}",
            param=param_name
        )
    if math.isnan(value) or math.isinf(value):
        raise ConfigurationError(
            f"{param_name} must be a finite number, got {value}",
            param=param_name
        )


def validate_positive_int(value: Any, param_name: str) -> None:
    """
    Validate that a value is a positive integer.

    Args:
        value: The value to validate
        param_name: Name of the parameter (for error messages)

    Raises:
        ConfigurationError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"{param_name} must be an integer, got {type(value).__name__}",
            param=param_name
        )
    if value <= 0:
        raise ConfigurationError(f"{param_name} must be positive, got {value}", param=param_name)


def validate_range(value: Any, param_name: str, min_val: Optional[float] = None,
                   max_val: Optional[float] = None, inclusive: bool = True) -> None:
    """
    Validate that a numeric value is finite and within a specified range.

    Args:
        value: The value to validate
        param_name: Name of the parameter (for error messages)
        min_val: Minimum allowed value (None for no minimum)
        max_val: Maximum allowed value (None for no maximum)
        inclusive: Whether endpoints are inclusive (default True)

    Raises:
        ConfigurationError: If value is outside the specified range
    """
    validate_finite(value, param_name)

    if min_val is not None:
        if inclusive and value < min_val:
            raise ConfigurationError(f"{param_name} must be >= {min_val}, got {value}", param=param_name)
        elif not inclusive and value <= min_val:
            raise ConfigurationError(f"{param_name} must be > {min_val}, got {value}", param=param_name)

    if max_val is not None:
        if inclusive and value > max_val:
            raise ConfigurationError(f"{param_name} must be <= {max_val}, got {value}", param=param_name)
        elif not inclusive and value >= max_val:
            raise ConfigurationError(f"{param_name} must be < {max_val}, got {value}", param=param_name)
