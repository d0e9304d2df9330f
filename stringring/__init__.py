"""Bounded circular buffer for UTF-8 text."""

from stringring.boundary import ceil_char_boundary_offset
from stringring.config_manager import ConfigManager, RingConfig
from stringring.exceptions import InvariantViolationError, StringRingError
from stringring.log_handler import RingLogHandler
from stringring.models import Granularity, RingState
from stringring.ring_buffer import StringRing

__version__ = "0.1.0"

__all__ = [
    "StringRing",
    "Granularity",
    "RingState",
    "RingConfig",
    "ConfigManager",
    "RingLogHandler",
    "StringRingError",
    "InvariantViolationError",
    "ceil_char_boundary_offset",
]
