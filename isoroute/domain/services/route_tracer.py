"""Domain service that traces an entity along a route at constant speed."""
import logging
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from ..models.route import Path, SegmentDirection, Waypoint
from ...shared.exceptions import PrematureQueryError
from ...shared.utils.validation_utils import (
    validate_positive_number, validate_non_negative_number
)

logger = logging.getLogger(__name__)

WaypointLike = Union[Waypoint, Sequence[float]]


class TraceState(Enum):
    """Lifecycle of a traced route."""
    IDLE = "idle"
    PLAYING = "playing"
    FINISHED = "finished"


class RouteTracer:
    """Samples the position of an entity walking a route.

    Travelled distance is velocity * elapsed seconds. Elapsed time only
    moves forward through update() and goes back to zero on set_route()
    and reset().
    """

    def __init__(self, velocity: float = 30.0):
        """Initialize route tracer.

        Args:
            velocity: Travel speed in world units per second
        """
        validate_positive_number(velocity, "velocity")
        self._velocity = float(velocity)
        self._path: Optional[Path] = None
        self._elapsed_seconds = 0.0

    @classmethod
    def from_settings(cls, tracer_settings) -> 'RouteTracer':
        return cls(velocity=tracer_settings.velocity)

    @property
    def velocity(self) -> float:
        return self._velocity

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed_seconds

    @property
    def travelled_distance(self) -> float:
        return self._velocity * self._elapsed_seconds

    @property
    def total_distance(self) -> float:
        return self._require_path().total_length

    @property
    def progress(self) -> float:
        """Travelled fraction of the current route in [0, 1]."""
        return self._require_path().progress_at(self.travelled_distance)

    @property
    def state(self) -> TraceState:
        if self._path is None:
            return TraceState.IDLE
        if self.travelled_distance >= self._path.total_length:
            return TraceState.FINISHED
        return TraceState.PLAYING

    def set_route(self, waypoints: Sequence[WaypointLike]) -> None:
        """Replace the current route and start tracing it from the beginning.

        Raises:
            InvalidRouteError: If fewer than 2 waypoints are given
        """
        self._path = Path(waypoints)
        self.reset()
        logger.debug(
            f"Tracing route of {len(self._path)} segments, "
            f"{self._path.total_length:.2f} units at {self._velocity} units/s"
        )

    def update(self, delta_seconds: float) -> None:
        """Advance elapsed time by one tick."""
        validate_non_negative_number(delta_seconds, "delta_seconds")
        self._elapsed_seconds += delta_seconds

    def get_position(self) -> Waypoint:
        """Current interpolated position; pinned to the last waypoint once finished.

        Raises:
            PrematureQueryError: If no route has been set
        """
        return self._require_path().position_at(self.travelled_distance)

    def get_position_and_direction(self) -> Tuple[Waypoint, SegmentDirection]:
        """Current position together with the facing on the active segment."""
        path = self._require_path()
        distance = self.travelled_distance
        return path.position_at(distance), path.segment_at(distance).direction

    def is_playing(self) -> bool:
        return self.state == TraceState.PLAYING

    def reset(self) -> None:
        """Restart the current route from its first waypoint."""
        self._elapsed_seconds = 0.0

    def _require_path(self) -> Path:
        if self._path is None:
            raise PrematureQueryError("Route tracer queried before any route was set")
        return self._path
