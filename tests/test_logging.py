import logging

import pytest

from geodistance.config.settings import get_logging_config, get_settings
from geodistance.core.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_applies_settings_level(monkeypatch):
    monkeypatch.setenv("GEODISTANCE_LOG_LEVEL", "debug")
    configure_logging()
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in root.handlers)


def test_configure_logging_leaves_cached_config_untouched(monkeypatch):
    monkeypatch.setenv("GEODISTANCE_LOG_LEVEL", "DEBUG")
    configure_logging()

    config = get_logging_config()
    assert config["root"]["level"] == "INFO"
    assert config["handlers"]["console"]["level"] == "INFO"


def test_later_configure_logging_does_not_inherit_previous_level(monkeypatch):
    monkeypatch.setenv("GEODISTANCE_LOG_LEVEL", "DEBUG")
    configure_logging()

    monkeypatch.delenv("GEODISTANCE_LOG_LEVEL")
    get_settings.cache_clear()
    configure_logging()
    assert logging.getLogger().level == logging.INFO
