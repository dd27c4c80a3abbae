"""Shared utilities."""
from .logging_utils import (
    setup_logging, get_context_logger, ContextLogger,
    CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME
)
from .validation_utils import (
    validate_grid_dimension, validate_positive_number,
    validate_non_negative_number, validate_log_level
)

__all__ = [
    'setup_logging', 'get_context_logger', 'ContextLogger',
    'CONSOLE_HANDLER_NAME', 'FILE_HANDLER_NAME',
    'validate_grid_dimension', 'validate_positive_number',
    'validate_non_negative_number', 'validate_log_level'
]
