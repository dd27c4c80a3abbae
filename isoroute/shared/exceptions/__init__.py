"""Shared exceptions for IsoRoute."""
from .base_exceptions import (
    IsoRouteException, ConfigurationError, ValidationError,
    RoutingError, TracingError
)
from .domain_exceptions import (
    RouteNotFoundError, InvalidRouteError, PrematureQueryError
)

__all__ = [
    'IsoRouteException', 'ConfigurationError', 'ValidationError',
    'RoutingError', 'TracingError',
    'RouteNotFoundError', 'InvalidRouteError', 'PrematureQueryError'
]
