"""Presence history: hourly presence aggregation with a rolling retention window."""

__version__ = "0.1.0"
