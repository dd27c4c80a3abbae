"""In-memory persistence and messaging."""
from .event_bus import EventBus

__all__ = ['EventBus']
