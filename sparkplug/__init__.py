"""Spark Plug: task prioritization, focus timer, and a falling-block reward game."""

__version__ = "0.21.0"
