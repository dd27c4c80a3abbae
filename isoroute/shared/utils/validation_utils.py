"""Validation utilities for IsoRoute."""
import math
import numbers
from typing import Any

from ..exceptions import ValidationError


def _is_number(value: Any) -> bool:
    """Real, finite and not a bool."""
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return False
    return math.isfinite(value)


def validate_grid_dimension(value: Any, field_name: str) -> None:
    """Validate a grid dimension (non-negative integer).

    Args:
        value: Dimension to validate
        field_name: Name of field for error reporting

    Raises:
        ValidationError: If value is not a non-negative integer
    """
    if not isinstance(value, numbers.Integral) or isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be an integer, got {type(value)}",
            field=field_name, value=value
        )

    if value < 0:
        raise ValidationError(
            f"{field_name} must be non-negative, got {value}",
            field=field_name, value=value
        )


def validate_positive_number(value: Any, field_name: str) -> None:
    """Validate that a value is a positive number.

    Args:
        value: Value to validate
        field_name: Name of field for error reporting

    Raises:
        ValidationError: If value is not a positive number
    """
    if not _is_number(value):
        raise ValidationError(
            f"{field_name} must be a finite number, got {value!r}",
            field=field_name, value=value
        )

    if value <= 0:
        raise ValidationError(
            f"{field_name} must be positive, got {value}",
            field=field_name, value=value
        )


def validate_non_negative_number(value: Any, field_name: str) -> None:
    """Validate that a value is a non-negative number.

    Args:
        value: Value to validate
        field_name: Name of field for error reporting

    Raises:
        ValidationError: If value is not non-negative
    """
    if not _is_number(value):
        raise ValidationError(
            f"{field_name} must be a finite number, got {value!r}",
            field=field_name, value=value
        )

    if value < 0:
        raise ValidationError(
            f"{field_name} must be non-negative, got {value}",
            field=field_name, value=value
        )


def validate_log_level(level: Any) -> None:
    """Validate a logging level name."""
    valid_levels = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
    if not isinstance(level, str) or level.upper() not in valid_levels:
        raise ValidationError(
            f"Log level must be one of {valid_levels}, got {level}",
            field="level", value=level
        )
