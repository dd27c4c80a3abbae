"""Application services."""
from .movement_controller import MovementController

__all__ = ['MovementController']
