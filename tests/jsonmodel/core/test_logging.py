"""Tests for loguru-based logging configuration."""

import json

import pytest
from loguru import logger

import jsonmodel.core.logging as logging_module
from jsonmodel.core.exceptions import ConfigurationError
from jsonmodel.core.logging import configure_logging, get_logger, normalize_level


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore the default configuration after each test."""
    yield
    configure_logging(force_reconfigure=True)


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_caches_results(self):
        """Test that get_logger caches bound loggers per name."""
        assert get_logger("test.cache") is get_logger("test.cache")

    def test_get_logger_applies_defaults(self):
        """Test that a default configuration exists once a logger is requested."""
        get_logger("test.defaults")
        assert logging_module._CURRENT_CONFIG is not None


class TestConfigureLogging:
    """Test configure_logging function."""

    @pytest.mark.parametrize("format", ["console", "json", "structured", "rich"])
    def test_formats(self, format):
        """Test each format installs exactly one console handler."""
        configure_logging(level="INFO", format=format, force_reconfigure=True)
        assert len(logging_module._HANDLER_IDS) == 1
        assert logging_module._CURRENT_CONFIG["format"] == format

    def test_same_settings_are_a_no_op(self):
        """Test reconfiguring with identical settings keeps the handlers."""
        configure_logging(level="ERROR", format="console", force_reconfigure=True)
        handlers = list(logging_module._HANDLER_IDS)
        configure_logging(level="ERROR", format="console")
        assert logging_module._HANDLER_IDS == handlers

    def test_output_file_receives_json(self, tmp_path):
        """Test file output is serialized one record per line."""
        log_file = tmp_path / "logs" / "jsonmodel.log"
        configure_logging(level="DEBUG", format="console", output_file=log_file)
        assert len(logging_module._HANDLER_IDS) == 2

        get_logger("test.file").bind(model="Product").info("Deriving schema")
        logger.complete()

        record = json.loads(log_file.read_text().splitlines()[-1])["record"]
        assert record["message"] == "Deriving schema"
        assert record["extra"]["model"] == "Product"
        assert record["extra"]["module"] == "test.file"


class TestForeignSinks:
    """Test that jsonmodel leaves sinks it did not add alone."""

    def test_host_sink_survives_default_configuration(self, monkeypatch):
        """Test a sink added by the host still receives records after import-time setup."""
        messages: list[str] = []
        sink_id = logger.add(messages.append, level="INFO", format="{message}")
        try:
            logger.info("before-import")
            monkeypatch.setattr(logging_module, "_CURRENT_CONFIG", None)
            logging_module._ensure_configured()
            configure_logging(level="ERROR", format="console", force_reconfigure=True)
            logger.info("after-import")
        finally:
            logger.remove(sink_id)

        assert [m.strip() for m in messages] == ["before-import", "after-import"]

    def test_default_handler_is_kept(self):
        """Test loguru's default handler is only removed on request."""
        had_default = 0 in logger._core.handlers
        configure_logging(level="ERROR", format="json", force_reconfigure=True)
        assert (0 in logger._core.handlers) == had_default


class TestLevels:
    """Test level validation and aliases."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("debug", "DEBUG"), ("Warn", "WARNING"), ("fatal", "CRITICAL"), (" info ", "INFO")],
    )
    def test_normalize_level(self, level, expected):
        assert normalize_level(level) == expected

    def test_unknown_level_is_rejected(self):
        """Test configure_logging refuses levels loguru does not know."""
        with pytest.raises(ConfigurationError, match="unknown level 'LOUD'"):
            configure_logging(level="LOUD")  # type: ignore[arg-type]

    def test_unknown_format_is_rejected(self):
        with pytest.raises(ConfigurationError, match="unknown format"):
            configure_logging(format="xml")  # type: ignore[arg-type]

    def test_alias_is_accepted(self):
        configure_logging(level="warn", force_reconfigure=True)  # type: ignore[arg-type]
        assert logging_module._CURRENT_CONFIG["level"] == "WARNING"

    @pytest.mark.parametrize(
        ("env_level", "expected"), [("bogus", "WARNING"), ("fatal", "CRITICAL")]
    )
    def test_environment_level(self, monkeypatch, env_level, expected):
        """Test bad environment levels fall back instead of failing at import."""
        monkeypatch.setenv("JSONMODEL_LOG_LEVEL", env_level)
        monkeypatch.setattr(logging_module, "_CURRENT_CONFIG", None)

        logging_module._ensure_configured()

        assert logging_module._CURRENT_CONFIG["level"] == expected

    def test_environment_format_falls_back(self, monkeypatch):
        monkeypatch.setenv("JSONMODEL_LOG_FORMAT", "fancy")
        monkeypatch.setattr(logging_module, "_CURRENT_CONFIG", None)

        logging_module._ensure_configured()

        assert logging_module._CURRENT_CONFIG["format"] == "structured"
