"""TOML configuration loader for jsonmodel."""

from __future__ import annotations

import os
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonmodel.core.config.models import JsonModelConfig, LoggingConfig, ParserConfig, SchemaConfig
from jsonmodel.core.exceptions import ConfigurationError
from jsonmodel.core.logging import get_logger, normalize_level

logger = get_logger(__name__)

# Constants for boolean environment variable parsing
_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

CONFIG_FILE_NAMES = ("jsonmodel.toml", ".jsonmodel.toml", "pyproject.toml")


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = _TRUTHY_VALUES | _FALSY_VALUES
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


class ConfigLoader:
    """Loads and processes jsonmodel configuration from TOML files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_from_toml(self, path: str | Path | None = None) -> JsonModelConfig:
        """Load configuration from a TOML file.

        Parameters
        ----------
        path : str | Path | None
            Path to TOML file. If None, searches the working directory

        Raises
        ------
        FileNotFoundError
            If an explicit path does not exist or no file is found
        ConfigurationError
            If the file is not valid TOML or holds invalid values
        """
        config_path = self._find_config_file(path)
        logger.info("Loading configuration from {path}", path=config_path)

        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_path), f"invalid TOML: {e}") from e

        if "tool" in data and "jsonmodel" in data.get("tool", {}):
            section = data["tool"]["jsonmodel"]
        elif config_path.name == "pyproject.toml":
            logger.warning("No [tool.jsonmodel] section found in pyproject.toml, using defaults")
            section = {}
        else:
            # Flat format (top-level keys)
            section = data

        return self._parse_config(self._substitute_env_vars(section))

    def _find_config_file(self, path: str | Path | None) -> Path:
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("JSONMODEL_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug("Using config from JSONMODEL_CONFIG_PATH: {path}", path=config_path)
                return config_path
            logger.warning("JSONMODEL_CONFIG_PATH set but file not found: {path}", path=config_path)

        for name in CONFIG_FILE_NAMES:
            candidate = Path(name)
            if candidate.exists():
                return candidate

        raise FileNotFoundError(
            f"No configuration file found. Searched for: {', '.join(CONFIG_FILE_NAMES)}"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` placeholders with environment values.

        Unknown variables keep their placeholder.
        """
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                value = os.environ.get(match.group(1))
                return match.group(0) if value is None else value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> JsonModelConfig:
        try:
            return JsonModelConfig(
                logging=self._parse_logging_config(data.get("logging", {})),
                schema=SchemaConfig(**data.get("schema", {})),
                parser=ParserConfig(**data.get("parser", {})),
            )
        except TypeError as e:
            # Unknown keys in a section
            raise ConfigurationError("config", str(e)) from e

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration with environment variable overrides.

        Environment variables take precedence over TOML configuration:
        - JSONMODEL_LOG_LEVEL: Log level
        - JSONMODEL_LOG_FORMAT: Output format (console, json, structured, rich)
        - JSONMODEL_LOG_FILE: Optional file path for log output
        - JSONMODEL_LOG_COLOR: Use color output (true/false)
        """
        level = str(logging_data.get("level", "WARNING")).upper()
        format_type = str(logging_data.get("format", "structured")).lower()
        output_file = logging_data.get("output_file")
        use_color = logging_data.get("use_color", True)
        include_timestamp = logging_data.get("include_timestamp", True)

        if env_level := os.getenv("JSONMODEL_LOG_LEVEL"):
            level = env_level.upper()
        level = normalize_level(level) or level

        if env_format := os.getenv("JSONMODEL_LOG_FORMAT"):
            format_type = env_format.lower()

        if env_file := os.getenv("JSONMODEL_LOG_FILE"):
            output_file = env_file

        if env_color := os.getenv("JSONMODEL_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(env_color)
            except ValueError as e:
                logger.warning(f"Invalid JSONMODEL_LOG_COLOR value: {e}")

        return LoggingConfig(
            level=level,  # type: ignore[arg-type]
            format=format_type,  # type: ignore[arg-type]
            output_file=output_file,
            use_color=use_color,
            include_timestamp=include_timestamp,
        )


@lru_cache(maxsize=32)
def _cached_load_config(path_str: str | None) -> JsonModelConfig:
    try:
        return ConfigLoader().load_from_toml(Path(path_str) if path_str else None)
    except FileNotFoundError:
        if path_str:
            raise
        logger.debug("No configuration file found, using defaults")
        return JsonModelConfig(logging=ConfigLoader()._parse_logging_config({}))


def load_config(path: str | Path | None = None) -> JsonModelConfig:
    """Load configuration from a TOML file, or defaults when none is found.

    An explicit ``path`` that does not exist raises FileNotFoundError.
    """
    return _cached_load_config(str(path) if path else None)


def clear_config_cache() -> None:
    """Clear cached configuration (e.g. after the file changed)."""
    _cached_load_config.cache_clear()
