"""Application service that walks an entity from cell to cell."""
from datetime import datetime
from typing import Optional, Sequence, Tuple, Union
from uuid import uuid4

from ...domain.events.movement_events import MoveStarted, MoveCompleted, MoveRejected
from ...domain.models.grid import GridCoordinate
from ...domain.models.route import Waypoint
from ...domain.models.world import WorldTransform
from ...domain.services.route_finder import RouteFinder
from ...domain.services.route_tracer import RouteTracer
from ...shared.exceptions import RouteNotFoundError, ValidationError
from ...shared.utils.logging_utils import get_context_logger
from ..interfaces.event_publisher import EventPublisher


class MovementController:
    """Glues route finding, the world transform and route tracing together.

    One controller owns one entity. A move request is answered with a new
    traced route, or rejected while a move is still in progress or when the
    goal cannot be reached.
    """

    def __init__(self,
                 route_finder: RouteFinder,
                 route_tracer: RouteTracer,
                 transform: WorldTransform,
                 start_cell: Union[GridCoordinate, Sequence[int]] = (0, 0),
                 event_publisher: Optional[EventPublisher] = None,
                 entity_name: str = "entity"):
        """Initialize movement controller.

        Args:
            route_finder: Finder for the grid the entity walks on
            route_tracer: Tracer owned by this controller
            transform: Grid to world transform used to build waypoints
            start_cell: Cell the entity stands on initially
            event_publisher: Optional sink for movement events
            entity_name: Name used in log messages
        """
        self.route_finder = route_finder
        self.route_tracer = route_tracer
        self.transform = transform
        self.event_publisher = event_publisher
        self.logger = get_context_logger(__name__, entity=entity_name)

        start_cell = GridCoordinate.from_value(start_cell)
        if not route_finder.bounds.contains(start_cell):
            raise ValidationError(
                f"Start cell {start_cell.as_tuple()} outside grid",
                field="start_cell", value=start_cell
            )

        self._current_cell = start_cell
        self._goal: Optional[GridCoordinate] = None
        self._route: Tuple[GridCoordinate, ...] = ()

    @property
    def current_cell(self) -> GridCoordinate:
        """Cell the entity last stood still on."""
        return self._current_cell

    @property
    def goal(self) -> Optional[GridCoordinate]:
        return self._goal

    @property
    def route(self) -> Tuple[GridCoordinate, ...]:
        """Cells of the move in progress, empty when idle."""
        return self._route

    @property
    def is_moving(self) -> bool:
        return self._goal is not None

    @property
    def position(self) -> Waypoint:
        if self.is_moving:
            return self.route_tracer.get_position()
        return self.transform.grid_to_world(self._current_cell)

    def move_to(self, goal: Union[GridCoordinate, Sequence[int]]) -> bool:
        """Request a move to a cell.

        Returns:
            True if the move was started (or the entity already stands there)
        """
        goal = GridCoordinate.from_value(goal)

        if self.is_moving:
            self.logger.info(f"Move to {goal.as_tuple()} ignored, still walking to {self._goal.as_tuple()}")
            self._publish(MoveRejected, goal=goal, reason="busy")
            return False

        if goal == self._current_cell:
            return True

        try:
            cells = self.route_finder.find(self._current_cell, goal)
        except RouteNotFoundError as e:
            self.logger.warning(f"Move to {goal.as_tuple()} rejected: {e}")
            self._publish(MoveRejected, goal=goal, reason="unreachable")
            return False

        self.route_tracer.set_route(self.transform.to_waypoints(cells))
        self._goal = goal
        self._route = tuple(cells)

        self.logger.info(
            f"Walking {self._current_cell.as_tuple()} -> {goal.as_tuple()} over {len(cells)} cells"
        )
        self._publish(
            MoveStarted,
            start=self._current_cell, goal=goal, cells=self._route,
            total_length=self.route_tracer.total_distance
        )
        return True

    def tick(self, delta_seconds: float) -> Waypoint:
        """Advance the move in progress and return the entity position."""
        if not self.is_moving:
            return self.position

        self.route_tracer.update(delta_seconds)
        position = self.route_tracer.get_position()

        if not self.route_tracer.is_playing():
            self._arrive()

        return position

    def _arrive(self) -> None:
        arrived_at = self._goal
        self._current_cell = arrived_at
        self._goal = None
        self._route = ()

        self.logger.info(f"Arrived at {arrived_at.as_tuple()}")
        self._publish(
            MoveCompleted,
            cell=arrived_at, elapsed_seconds=self.route_tracer.elapsed_seconds
        )

    def _publish(self, event_type, **fields) -> None:
        if self.event_publisher is None:
            return
        self.event_publisher.publish(
            event_type(timestamp=datetime.now(), event_id=str(uuid4()), **fields)
        )
