"""Configuration loading and management for jsonmodel."""

from jsonmodel.core.config.loader import ConfigLoader, clear_config_cache, load_config
from jsonmodel.core.config.models import (
    JsonModelConfig,
    LoggingConfig,
    ParserConfig,
    SchemaConfig,
)

__all__ = [
    "ConfigLoader",
    "JsonModelConfig",
    "LoggingConfig",
    "ParserConfig",
    "SchemaConfig",
    "clear_config_cache",
    "load_config",
]
