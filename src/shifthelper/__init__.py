"""Shift scheduling and availability matching for small businesses."""

__version__ = "0.1.0"
