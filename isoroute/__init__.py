"""
isoroute - route finding and route tracing for isometric tile games
"""

# Version information
__version__ = "1.0.0"
__license__ = "MIT"
__description__ = "Grid route finding and constant-speed route tracing for isometric tile games"

from .domain.models import GridCoordinate, GridBounds, Waypoint, PathSegment, Path, WorldTransform
from .domain.services import RouteFinder, RouteTracer, TraceState
from .application.services import MovementController
from .shared.exceptions import (
    IsoRouteException, RouteNotFoundError, InvalidRouteError, PrematureQueryError
)

__all__ = [
    'GridCoordinate', 'GridBounds', 'Waypoint', 'PathSegment', 'Path', 'WorldTransform',
    'RouteFinder', 'RouteTracer', 'TraceState',
    'MovementController',
    'IsoRouteException', 'RouteNotFoundError', 'InvalidRouteError', 'PrematureQueryError',
]
