"""Mechanic shop database front end."""

__version__ = "1.0.0"
