"""Presentation layer for IsoRoute."""
from .cli import main, create_parser

__all__ = ['main', 'create_parser']
