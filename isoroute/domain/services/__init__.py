"""Domain services."""
from .route_finder import (
    RouteFinder, HeuristicFunction, EuclideanHeuristic, ZeroHeuristic,
    SearchNode, SearchArena, OpenSet
)
from .route_tracer import RouteTracer, TraceState

__all__ = [
    'RouteFinder', 'HeuristicFunction', 'EuclideanHeuristic', 'ZeroHeuristic',
    'SearchNode', 'SearchArena', 'OpenSet',
    'RouteTracer', 'TraceState'
]
