"""Herd immunity: an agent-based epidemic simulation."""

__version__ = "0.1.0"
