"""Base exceptions for IsoRoute."""


class IsoRouteException(Exception):
    """Base exception class for IsoRoute."""

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        """Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            details: Optional additional error details
        """
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of exception."""
        base_msg = super().__str__()
        if self.error_code:
            return f"[{self.error_code}] {base_msg}"
        return base_msg


class ConfigurationError(IsoRouteException):
    """Exception raised for configuration-related errors."""
    pass


class ValidationError(IsoRouteException):
    """Exception raised for validation errors."""

    def __init__(self, message: str, field: str = None, value=None, **kwargs):
        """Initialize validation error.

        Args:
            message: Error message
            field: Field that failed validation
            value: Invalid value
        """
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class RoutingError(IsoRouteException):
    """Exception raised for route finding errors."""
    pass


class TracingError(IsoRouteException):
    """Exception raised for route tracing errors."""
    pass
