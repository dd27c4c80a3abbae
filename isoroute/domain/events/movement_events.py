"""Domain events related to entity movement."""
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from ..models.grid import GridCoordinate


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""
    timestamp: datetime
    event_id: str

    def __post_init__(self):
        if not self.timestamp:
            object.__setattr__(self, 'timestamp', datetime.now())


@dataclass(frozen=True)
class MoveStarted(DomainEvent):
    """Event fired when an entity starts walking a new route."""
    start: GridCoordinate
    goal: GridCoordinate
    cells: Tuple[GridCoordinate, ...]
    total_length: float


@dataclass(frozen=True)
class MoveCompleted(DomainEvent):
    """Event fired when an entity reaches the end of its route."""
    cell: GridCoordinate
    elapsed_seconds: float


@dataclass(frozen=True)
class MoveRejected(DomainEvent):
    """Event fired when a move request is not performed."""
    goal: GridCoordinate
    reason: str
