"""Ikigai personal finance planner."""

__version__ = "0.4.0"
