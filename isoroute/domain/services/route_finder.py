"""Domain service for finding routes across the tile grid."""
import heapq
import itertools
import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from ..models.grid import GridBounds, GridCoordinate
from ...shared.exceptions import RouteNotFoundError
from ...shared.utils.validation_utils import validate_grid_dimension

logger = logging.getLogger(__name__)

CoordinateLike = Union[GridCoordinate, Sequence[int]]


class HeuristicFunction(ABC):
    """Abstract base class for heuristic functions."""

    @abstractmethod
    def calculate(self, start: GridCoordinate, end: GridCoordinate) -> float:
        """Calculate heuristic cost between two cells."""
        pass


class EuclideanHeuristic(HeuristicFunction):
    """Straight-line distance heuristic."""

    def calculate(self, start: GridCoordinate, end: GridCoordinate) -> float:
        return start.distance_to(end)


class ZeroHeuristic(HeuristicFunction):
    """Zero heuristic, turns the search into Dijkstra's algorithm."""

    def calculate(self, start: GridCoordinate, end: GridCoordinate) -> float:
        return 0.0


@dataclass
class SearchNode:
    """Search state for one discovered cell."""
    coordinate: GridCoordinate
    g_score: float = math.inf  # Cost from start
    h_score: float = 0.0  # Heuristic to goal
    parent: Optional[int] = None  # Arena index of predecessor

    @property
    def f_score(self) -> float:
        return self.g_score + self.h_score


class SearchArena:
    """Owns every SearchNode of one search, one node per coordinate."""

    def __init__(self):
        self._nodes: List[SearchNode] = []
        self._index: Dict[GridCoordinate, int] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def index_of(self, coord: GridCoordinate) -> Optional[int]:
        return self._index.get(coord)

    def get_or_create(self, coord: GridCoordinate) -> int:
        """Return the node index for a coordinate, creating the node on first sight."""
        index = self._index.get(coord)
        if index is None:
            index = len(self._nodes)
            self._nodes.append(SearchNode(coord))
            self._index[coord] = index
        return index

    def node(self, index: int) -> SearchNode:
        return self._nodes[index]

    def reconstruct(self, index: int) -> List[GridCoordinate]:
        """Walk predecessor indices back to the root, returned root first."""
        route = []
        current: Optional[int] = index
        while current is not None:
            if len(route) > len(self._nodes):
                raise RuntimeError("Cycle in predecessor chain")
            node = self._nodes[current]
            route.append(node.coordinate)
            current = node.parent
        route.reverse()
        return route


class OpenSet:
    """Frontier of nodes still to expand, ordered by f_score.

    Entries are invalidated lazily: re-pushing a node supersedes its older
    heap entries, which are skipped when popped. Order among equal f_score
    values is unspecified.
    """

    def __init__(self, arena: SearchArena):
        self._arena = arena
        self._heap = []
        self._members: Dict[int, int] = {}  # node index -> live entry id
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, coord: GridCoordinate) -> bool:
        index = self._arena.index_of(coord)
        return index is not None and index in self._members

    def is_empty(self) -> bool:
        return not self._members

    def get(self, coord: GridCoordinate) -> Optional[SearchNode]:
        """Look up an open node by coordinate."""
        if coord not in self:
            return None
        return self._arena.node(self._arena.index_of(coord))

    def push(self, index: int) -> None:
        """Insert a node, or refresh its priority if already open."""
        entry_id = next(self._counter)
        self._members[index] = entry_id
        heapq.heappush(self._heap, (self._arena.node(index).f_score, entry_id, index))

    def remove(self, coord: GridCoordinate) -> None:
        index = self._arena.index_of(coord)
        if index is not None:
            self._members.pop(index, None)

    def pop_best(self) -> int:
        """Remove and return the index of the open node with minimum f_score."""
        while self._heap:
            _, entry_id, index = heapq.heappop(self._heap)
            if self._members.get(index) == entry_id:
                del self._members[index]
                return index
        raise IndexError("pop from empty open set")


class RouteFinder:
    """A* route finding on an obstacle-free, 8-connected grid.

    The grid spans [0, map_width] x [0, map_height], edges included.
    """

    def __init__(self, map_width: int, map_height: int,
                 heuristic: HeuristicFunction = None):
        """Initialize route finder.

        Args:
            map_width: Largest valid x coordinate
            map_height: Largest valid y coordinate
            heuristic: Remaining-cost estimate, Euclidean distance by default
        """
        validate_grid_dimension(map_width, "map_width")
        validate_grid_dimension(map_height, "map_height")
        self.bounds = GridBounds(map_width, map_height)
        self.heuristic = heuristic or EuclideanHeuristic()

    @classmethod
    def from_settings(cls, grid_settings, heuristic: HeuristicFunction = None) -> 'RouteFinder':
        return cls(grid_settings.map_width, grid_settings.map_height, heuristic)

    @property
    def map_width(self) -> int:
        return self.bounds.width

    @property
    def map_height(self) -> int:
        return self.bounds.height

    @staticmethod
    def step_cost(current: GridCoordinate, neighbor: GridCoordinate) -> float:
        """Cost of one move: 1 for straight steps, sqrt(2) for diagonals."""
        return current.distance_to(neighbor)

    def find(self, start: CoordinateLike, goal: CoordinateLike) -> List[GridCoordinate]:
        """Find a shortest route between two cells.

        Args:
            start: Start cell, as GridCoordinate or (x, y)
            goal: Goal cell, as GridCoordinate or (x, y)

        Returns:
            Cells from start to goal, both included

        Raises:
            RouteNotFoundError: If the open set is exhausted before the goal
        """
        start = GridCoordinate.from_value(start)
        goal = GridCoordinate.from_value(goal)
        start_time = time.perf_counter()

        arena = SearchArena()
        open_set = OpenSet(arena)

        start_index = arena.get_or_create(start)
        start_node = arena.node(start_index)
        start_node.g_score = 0.0
        start_node.h_score = self.heuristic.calculate(start, goal)
        open_set.push(start_index)

        expansions = 0

        while not open_set.is_empty():
            current_index = open_set.pop_best()
            current = arena.node(current_index)

            if current.coordinate == goal:
                route = arena.reconstruct(current_index)
                logger.debug(
                    f"Route {start} -> {goal}: {len(route)} cells, cost {current.g_score:.3f}, "
                    f"{expansions} expansions in {time.perf_counter() - start_time:.4f}s"
                )
                return route

            expansions += 1
            self._relax_neighbors(arena, open_set, current_index, goal)

        logger.debug(f"Open set exhausted after {expansions} expansions, no route {start} -> {goal}")
        raise RouteNotFoundError(
            f"No possible route from {start.as_tuple()} to {goal.as_tuple()}",
            start=start, goal=goal,
            details={"expansions": expansions, "bounds": (self.map_width, self.map_height)}
        )

    def _relax_neighbors(self, arena: SearchArena, open_set: OpenSet,
                         current_index: int, goal: GridCoordinate) -> None:
        """Improve neighbours reachable more cheaply through the current node."""
        current = arena.node(current_index)

        for neighbor_coord in self.bounds.neighbors(current.coordinate):
            neighbor_index = arena.get_or_create(neighbor_coord)
            neighbor = arena.node(neighbor_index)

            tentative_g = current.g_score + self.step_cost(current.coordinate, neighbor_coord)

            if tentative_g < neighbor.g_score:
                neighbor.parent = current_index
                neighbor.g_score = tentative_g
                neighbor.h_score = self.heuristic.calculate(neighbor_coord, goal)
                open_set.push(neighbor_index)

    def estimate_route_cost(self, start: CoordinateLike, goal: CoordinateLike) -> float:
        """Estimate the cost of a route between two cells."""
        return self.heuristic.calculate(GridCoordinate.from_value(start),
                                        GridCoordinate.from_value(goal))

    def route_cost(self, route: Sequence[CoordinateLike]) -> float:
        """Sum of step costs along a route."""
        cells = [GridCoordinate.from_value(cell) for cell in route]
        return sum(self.step_cost(a, b) for a, b in zip(cells[:-1], cells[1:]))

    def validate_route(self, route: Sequence[CoordinateLike]) -> List[str]:
        """Check that a route stays on the grid and moves one 8-connected step at a time."""
        issues = []

        if not route:
            return ["Route is empty"]

        cells = [GridCoordinate.from_value(cell) for cell in route]

        for i, cell in enumerate(cells):
            if not self.bounds.contains(cell):
                issues.append(f"Cell {i} outside grid: {cell.as_tuple()}")

        for i in range(len(cells) - 1):
            current = cells[i]
            next_cell = cells[i + 1]
            if not current.is_adjacent_to(next_cell):
                issues.append(
                    f"Invalid movement at step {i}: {current.as_tuple()} -> {next_cell.as_tuple()}"
                )

        return issues
