"""Shared pytest fixtures for the jsonmodel test suite."""

import pytest

from jsonmodel.core.config import clear_config_cache

_ENV_VARS = (
    "JSONMODEL_CONFIG_PATH",
    "JSONMODEL_LOG_LEVEL",
    "JSONMODEL_LOG_FORMAT",
    "JSONMODEL_LOG_FILE",
    "JSONMODEL_LOG_COLOR",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Start every test without jsonmodel environment overrides or cached config."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
