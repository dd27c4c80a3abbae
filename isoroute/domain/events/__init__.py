"""Domain events."""
from .movement_events import DomainEvent, MoveStarted, MoveCompleted, MoveRejected

__all__ = ['DomainEvent', 'MoveStarted', 'MoveCompleted', 'MoveRejected']
