"""Hostel room inventory and bed allocation service."""

__version__ = "1.0.0"
