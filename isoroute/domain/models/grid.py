"""Domain models for the tile grid."""
import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Union


@dataclass(frozen=True)
class GridCoordinate:
    """Value object representing an integer grid cell."""
    x: int
    y: int

    @classmethod
    def from_value(cls, value: Union['GridCoordinate', Sequence[int]]) -> 'GridCoordinate':
        """Build a coordinate from another coordinate or an (x, y) pair."""
        if isinstance(value, GridCoordinate):
            return value
        x, y = value
        return cls(int(x), int(y))

    def distance_to(self, other: 'GridCoordinate') -> float:
        """Calculate Euclidean distance to another coordinate."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_adjacent_to(self, other: 'GridCoordinate') -> bool:
        """Check if other is one 8-connected step away."""
        dx = abs(self.x - other.x)
        dy = abs(self.y - other.y)
        return max(dx, dy) == 1

    def as_tuple(self):
        return (self.x, self.y)


# Offsets of the 8 surrounding cells
NEIGHBOR_OFFSETS = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


@dataclass(frozen=True)
class GridBounds:
    """Value object for an inclusive grid extent: [0, width] x [0, height]."""
    width: int
    height: int

    def contains(self, coord: GridCoordinate) -> bool:
        """Check if a coordinate lies inside the grid (edges included)."""
        return 0 <= coord.x <= self.width and 0 <= coord.y <= self.height

    def neighbors(self, coord: GridCoordinate) -> Iterator[GridCoordinate]:
        """Yield the in-bounds 8-connected neighbours of a cell."""
        for dx, dy in NEIGHBOR_OFFSETS:
            neighbor = GridCoordinate(coord.x + dx, coord.y + dy)
            if self.contains(neighbor):
                yield neighbor

    @property
    def cell_count(self) -> int:
        return (self.width + 1) * (self.height + 1)
