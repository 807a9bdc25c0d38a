"""Tally votes cast across independent contests."""

__version__ = "0.1.0"
