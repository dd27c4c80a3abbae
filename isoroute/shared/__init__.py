"""Shared kernel: exceptions, configuration and utilities."""
