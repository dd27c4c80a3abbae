"""Domain models."""
from .grid import GridCoordinate, GridBounds, NEIGHBOR_OFFSETS
from .route import Waypoint, PathSegment, SegmentDirection, Path
from .world import WorldTransform

__all__ = [
    'GridCoordinate', 'GridBounds', 'NEIGHBOR_OFFSETS',
    'Waypoint', 'PathSegment', 'SegmentDirection', 'Path',
    'WorldTransform'
]
