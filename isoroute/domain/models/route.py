"""Domain models for traced routes in world space."""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np

from ...shared.exceptions import InvalidRouteError


@dataclass(frozen=True)
class Waypoint:
    """Value object representing a 3D point in world units."""
    x: float
    y: float
    z: float

    @classmethod
    def from_value(cls, value: Union['Waypoint', Sequence[float]]) -> 'Waypoint':
        """Build a waypoint from another waypoint or an (x, y, z) triple."""
        if isinstance(value, Waypoint):
            return value
        x, y, z = value
        return cls(float(x), float(y), float(z))

    def distance_to(self, other: 'Waypoint') -> float:
        """Calculate Euclidean distance to another waypoint."""
        return math.dist(self.as_tuple(), other.as_tuple())

    def lerp(self, other: 'Waypoint', fraction: float) -> 'Waypoint':
        """Linear interpolation towards other (0 -> self, 1 -> other)."""
        return Waypoint(
            self.x + (other.x - self.x) * fraction,
            self.y + (other.y - self.y) * fraction,
            self.z + (other.z - self.z) * fraction,
        )

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


class SegmentDirection(Enum):
    """Facing of an entity walking a segment, as seen on the isometric floor."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


@dataclass(frozen=True)
class PathSegment:
    """Value object for the straight line between two consecutive waypoints."""
    start: Waypoint
    end: Waypoint

    @property
    def length(self) -> float:
        """Calculate segment length."""
        return self.start.distance_to(self.end)

    def point_at(self, fraction: float) -> Waypoint:
        """Point at a fraction of the segment, clamped to [0, 1]."""
        if self.length == 0:
            return self.start
        return self.start.lerp(self.end, min(max(fraction, 0.0), 1.0))

    @property
    def direction(self) -> SegmentDirection:
        # z (grid y) takes precedence over x for diagonal steps
        if self.start.z < self.end.z:
            return SegmentDirection.UP
        if self.start.z > self.end.z:
            return SegmentDirection.DOWN
        if self.start.x < self.end.x:
            return SegmentDirection.LEFT
        if self.start.x > self.end.x:
            return SegmentDirection.RIGHT
        return SegmentDirection.NONE


class Path:
    """Immutable distance-indexed polyline built from at least two waypoints.

    Each segment is keyed by the cumulative distance at which it starts, so
    the segment covering a travelled distance is found with a binary search.
    """

    def __init__(self, waypoints: Sequence[Union[Waypoint, Sequence[float]]]):
        points = [Waypoint.from_value(point) for point in waypoints]
        if len(points) < 2:
            raise InvalidRouteError(
                f"A route needs at least 2 waypoints, got {len(points)}",
                waypoint_count=len(points)
            )

        self._waypoints: Tuple[Waypoint, ...] = tuple(points)
        self._segments: Tuple[PathSegment, ...] = tuple(
            PathSegment(start, end) for start, end in zip(points[:-1], points[1:])
        )

        lengths = np.array([segment.length for segment in self._segments], dtype=float)
        cumulative = np.cumsum(lengths)
        self._segment_lengths = lengths
        self._start_distances = np.concatenate(([0.0], cumulative[:-1]))
        self._total_length = float(cumulative[-1])

    @property
    def waypoints(self) -> Tuple[Waypoint, ...]:
        return self._waypoints

    @property
    def segments(self) -> Tuple[PathSegment, ...]:
        return self._segments

    @property
    def start_distances(self) -> np.ndarray:
        """Cumulative distance at which each segment starts (read-only copy)."""
        return self._start_distances.copy()

    @property
    def total_length(self) -> float:
        return self._total_length

    @property
    def start(self) -> Waypoint:
        return self._waypoints[0]

    @property
    def end(self) -> Waypoint:
        return self._waypoints[-1]

    def __len__(self) -> int:
        return len(self._segments)

    def segment_index_at(self, distance: float) -> int:
        """Index of the segment covering a travelled distance.

        Picks the segment with start <= distance < start + length. On a
        boundary shared by two segments the later one wins. Distances past
        the end map to the last segment.
        """
        if distance >= self._total_length:
            return len(self._segments) - 1
        index = int(np.searchsorted(self._start_distances, distance, side='right')) - 1
        return max(index, 0)

    def progress_at(self, distance: float) -> float:
        """Travelled fraction of the path, clamped to [0, 1]."""
        if self._total_length == 0:
            return 1.0
        return min(max(distance / self._total_length, 0.0), 1.0)

    def position_at(self, distance: float) -> Waypoint:
        """Interpolated position after travelling a distance from the start."""
        if distance >= self._total_length:
            return self.end
        if distance <= 0:
            return self.start

        index = self.segment_index_at(distance)
        segment = self._segments[index]
        offset = distance - float(self._start_distances[index])
        return segment.point_at(offset / float(self._segment_lengths[index]))

    def segment_at(self, distance: float) -> PathSegment:
        return self._segments[self.segment_index_at(distance)]
