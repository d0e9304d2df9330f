"""Configuration for string rings."""

from stringring.config_manager.config import ConfigManager
from stringring.config_manager.helpers import parse_bytes
from stringring.config_manager.ring_config import RingConfig

__all__ = ["ConfigManager", "RingConfig", "parse_bytes"]
