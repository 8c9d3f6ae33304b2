"""Configuration data models for jsonmodel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from jsonmodel.core.exceptions import ConfigurationError

_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_FORMATS = ("console", "json", "structured", "rich")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for jsonmodel.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.jsonmodel.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export JSONMODEL_LOG_LEVEL=DEBUG
    export JSONMODEL_LOG_FORMAT=json
    export JSONMODEL_LOG_FILE=/var/log/jsonmodel.log
    ```
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True

    def __post_init__(self) -> None:
        """Validate level and format.

        Raises
        ------
        ConfigurationError
            If level or format is not a known value
        """
        if self.level not in _LEVELS:
            raise ConfigurationError("logging", f"unknown level {self.level!r}")
        if self.format not in _FORMATS:
            raise ConfigurationError("logging", f"unknown format {self.format!r}")


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    """Schema output settings.

    Attributes
    ----------
    indent : int, default=2
        Indentation of pretty-printed JSON schemas
    """

    indent: int = 2

    def __post_init__(self) -> None:
        if self.indent < 0:
            raise ConfigurationError("schema", f"indent must be >= 0, got {self.indent}")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Parser strictness defaults used by the CLI.

    Attributes
    ----------
    reject_null_for_non_nullable : bool, default=False
        Reject ``null`` for fields whose type does not admit ``None``
    reject_missing_fields : bool, default=False
        Reject input that omits a declared field
    """

    reject_null_for_non_nullable: bool = False
    reject_missing_fields: bool = False


@dataclass(slots=True)
class JsonModelConfig:
    """Complete jsonmodel configuration.

    Examples
    --------
    TOML configuration in pyproject.toml:

    ```toml
    [tool.jsonmodel.logging]
    level = "INFO"

    [tool.jsonmodel.schema]
    indent = 4

    [tool.jsonmodel.parser]
    reject_missing_fields = true
    ```
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    schema: SchemaConfig = field(default_factory=SchemaConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
