"""Centralized logging configuration for jsonmodel using Loguru.

Examples
--------
Basic usage:

>>> from jsonmodel.core.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.debug("Deriving schema", model="Product")

Configure logging globally::

    from jsonmodel.core.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

import os
import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from jsonmodel.core.types import Logger

from loguru import logger
from rich.logging import RichHandler

from jsonmodel.core.exceptions import ConfigurationError

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

LOG_LEVELS: tuple[str, ...] = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS: tuple[str, ...] = ("console", "json", "structured", "rich")
LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []


def normalize_level(level: str) -> str | None:
    """Upper-case a level name and resolve aliases; None if it is unknown.

    Examples
    --------
    >>> normalize_level("warn")
    'WARNING'
    >>> normalize_level("loud") is None
    True
    """
    name = level.strip().upper()
    name = LEVEL_ALIASES.get(name, name)
    return name if name in LOG_LEVELS else None


def configure_logging(
    level: LogLevel = "WARNING",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
    backtrace: bool = True,
    diagnose: bool = False,
    replace_default_sink: bool = False,
) -> None:
    """Configure global logging for jsonmodel.

    Calling it again with the same settings is a no-op.

    Parameters
    ----------
    level : LogLevel, default="WARNING"
        Minimum log level to output
    format : LogFormat, default="structured"
        Output format:
        - "console": Simple console output (no colors, basic format)
        - "json": One JSON record per line
        - "structured": Colored structured format (Loguru native)
        - "rich": Rich console handler
    output_file : str | Path | None, default=None
        Optional file path to write JSON logs to (in addition to console)
    use_color : bool, default=True
        Use ANSI color codes in structured format (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    force_reconfigure : bool, default=False
        Force reconfiguration even if already configured with same settings
    backtrace : bool, default=True
        Enable extended backtraces
    diagnose : bool, default=False
        Show variable values in tracebacks
    replace_default_sink : bool, default=False
        Also remove loguru's default stderr handler (id 0). Only an
        application that owns the process, such as the CLI, should pass True;
        library use leaves sinks it did not add untouched.

    Raises
    ------
    ConfigurationError
        If level or format is not a known value
    """
    global _CURRENT_CONFIG

    normalized = normalize_level(level)
    if normalized is None:
        raise ConfigurationError("logging", f"unknown level {level!r}")
    if format not in LOG_FORMATS:
        raise ConfigurationError("logging", f"unknown format {format!r}")
    level = normalized  # type: ignore[assignment]

    if replace_default_sink:
        with suppress(ValueError):
            logger.remove(0)

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
        "backtrace": backtrace,
        "diagnose": diagnose,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    # Remove only our previously added handlers (not external ones)
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    if format == "rich":
        rich_handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=True,
        )
        handler_id = logger.add(
            sink=rich_handler,
            level=level,
            format="{message}",
            backtrace=backtrace,
            diagnose=diagnose,
        )

    elif format == "json":
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            serialize=True,
            backtrace=backtrace,
            diagnose=diagnose,
        )

    elif format == "structured":
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        color_level = (
            "<level>{level: <8}</level>" if use_color and sys.stderr.isatty() else "{level: <8}"
        )
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
        )
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=structured_format,
            colorize=use_color and sys.stderr.isatty(),
            backtrace=backtrace,
            diagnose=diagnose,
        )

    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        console_format = f"{timestamp_fmt}{{level: <8}} | {{name}} | {{message}}"
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=console_format,
            colorize=False,
            backtrace=backtrace,
            diagnose=diagnose,
        )
    _HANDLER_IDS.append(handler_id)

    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # File output always uses JSON for easier parsing
        handler_id = logger.add(
            sink=output_path,
            level=level,
            serialize=True,
            backtrace=backtrace,
            diagnose=diagnose,
        )
        _HANDLER_IDS.append(handler_id)

    _CURRENT_CONFIG = current_config


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Get a logger instance bound with the given module name.

    If configure_logging() hasn't been called yet, defaults are applied first
    (overridable with ``JSONMODEL_LOG_LEVEL`` and ``JSONMODEL_LOG_FORMAT``).

    Parameters
    ----------
    name : str
        Logger name, typically __name__ from the calling module
    """
    _ensure_configured()
    return logger.bind(module=name)


def _ensure_configured() -> None:
    """Apply default configuration once, honoring environment overrides.

    Unknown values in the environment fall back to the defaults with a
    warning so that importing jsonmodel never fails on them.
    """
    if _CURRENT_CONFIG is not None:
        return

    env_level = os.getenv("JSONMODEL_LOG_LEVEL", "WARNING")
    env_format = os.getenv("JSONMODEL_LOG_FORMAT", "structured").strip().lower()
    level = normalize_level(env_level) or "WARNING"
    format_type = env_format if env_format in LOG_FORMATS else "structured"

    configure_logging(level=level, format=format_type)  # type: ignore[arg-type]

    if level != normalize_level(env_level):
        logger.warning(f"Ignoring unknown JSONMODEL_LOG_LEVEL {env_level!r}, using WARNING")
    if format_type != env_format:
        logger.warning(
            f"Ignoring unknown JSONMODEL_LOG_FORMAT {env_format!r}, using structured"
        )
