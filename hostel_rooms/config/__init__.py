"""
Configuration package for the hostel room service.

Contains environment settings and logging configuration.
"""

from hostel_rooms.config.settings import Settings, get_settings, settings
from hostel_rooms.config.logging import get_logger, setup_logging

__all__ = ['Settings', 'get_settings', 'settings', 'get_logger', 'setup_logging']
