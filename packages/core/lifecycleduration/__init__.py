"""Elapsed time of governed registry resources in their current lifecycle state."""

__version__ = "0.1.0"
