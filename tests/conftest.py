"""Test configuration and fixtures for IsoRoute."""
import logging

import pytest

from isoroute.application.services import MovementController
from isoroute.domain.models import WorldTransform
from isoroute.domain.services import RouteFinder, RouteTracer
from isoroute.infrastructure.persistence import EventBus


@pytest.fixture
def finder():
    """Route finder over an 11x11 cell grid (coordinates 0..10)."""
    return RouteFinder(10, 10)


@pytest.fixture
def tracer():
    """Route tracer at the default 30 units per second."""
    return RouteTracer(velocity=30.0)


@pytest.fixture
def transform():
    """Transform matching the default world settings."""
    return WorldTransform(cell_size=50.0, vertical_offset=27.5)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def controller(finder, tracer, transform, event_bus):
    """Movement controller standing on (0, 0)."""
    return MovementController(finder, tracer, transform, start_cell=(0, 0),
                              event_publisher=event_bus)


@pytest.fixture
def config_path(tmp_path):
    """Path for a throwaway configuration file."""
    return tmp_path / "config" / "isoroute.json"


@pytest.fixture
def restore_root_logger():
    """Undo any handler and level changes made to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
