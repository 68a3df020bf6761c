"""Utility modules: config loading and structured logging."""

from plantsim.utils.config import ConfigError, ConfigLoader, PlantConfig
from plantsim.utils.logging import StructuredLogger, get_logger

__all__ = [
    "ConfigLoader",
    "ConfigError",
    "PlantConfig",
    "StructuredLogger",
    "get_logger",
]
