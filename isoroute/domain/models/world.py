"""Grid to world space transform."""
from dataclasses import dataclass
from typing import Iterable, List

from .grid import GridCoordinate
from .route import Waypoint


@dataclass(frozen=True)
class WorldTransform:
    """Maps grid cells onto the isometric floor plane.

    Grid x runs along world x and grid y along world z; world y is the
    height at which an entity standing on a tile is centred.
    """
    cell_size: float = 50.0
    vertical_offset: float = 27.5

    @classmethod
    def from_settings(cls, world_settings) -> 'WorldTransform':
        return cls(
            cell_size=world_settings.cell_size,
            vertical_offset=world_settings.vertical_offset
        )

    def grid_to_world(self, coord: GridCoordinate) -> Waypoint:
        coord = GridCoordinate.from_value(coord)
        return Waypoint(
            float(coord.x * self.cell_size),
            float(self.vertical_offset),
            float(coord.y * self.cell_size)
        )

    def world_to_grid(self, point: Waypoint) -> GridCoordinate:
        """Snap a world position to the nearest grid cell."""
        point = Waypoint.from_value(point)
        return GridCoordinate(
            int(round(point.x / self.cell_size)),
            int(round(point.z / self.cell_size))
        )

    def to_waypoints(self, cells: Iterable[GridCoordinate]) -> List[Waypoint]:
        return [self.grid_to_world(cell) for cell in cells]
