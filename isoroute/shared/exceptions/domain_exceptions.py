"""Domain-specific exceptions."""
from .base_exceptions import RoutingError, TracingError


class RouteNotFoundError(RoutingError):
    """Exception raised when no route connects start and goal."""

    def __init__(self, message: str, start=None, goal=None, **kwargs):
        """Initialize route not found error.

        Args:
            message: Error message
            start: Requested start cell
            goal: Requested goal cell
        """
        kwargs.setdefault('error_code', 'ROUTE_NOT_FOUND')
        super().__init__(message, **kwargs)
        self.start = start
        self.goal = goal


class InvalidRouteError(TracingError):
    """Exception raised when a route has too few waypoints to trace."""

    def __init__(self, message: str, waypoint_count: int = None, **kwargs):
        """Initialize invalid route error.

        Args:
            message: Error message
            waypoint_count: Number of waypoints that were supplied
        """
        kwargs.setdefault('error_code', 'INVALID_ROUTE')
        super().__init__(message, **kwargs)
        self.waypoint_count = waypoint_count


class PrematureQueryError(TracingError):
    """Exception raised when the tracer is queried before a route is set."""

    def __init__(self, message: str = "No route has been set", **kwargs):
        kwargs.setdefault('error_code', 'PREMATURE_QUERY')
        super().__init__(message, **kwargs)
