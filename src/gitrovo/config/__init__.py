"""Configuration loading, schema, and defaults."""

from gitrovo.config.loader import ConfigError, load_config
from gitrovo.config.schema import GitConfig, LoggerConfig, OutputConfig, RovoConfig

__all__ = [
    "ConfigError",
    "GitConfig",
    "LoggerConfig",
    "OutputConfig",
    "RovoConfig",
    "load_config",
]
