"""Unit tests for pocketcal logging configuration."""

import logging
from collections.abc import Generator
from typing import Any

import pytest

from pocketcal import _init_logging
from pocketcal.cal_logging import POCKETCAL_MODULES, configure_logging, get_logging_status

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_logger_levels() -> Generator[None, Any, None]:
    """Put logger levels back so other tests see the defaults."""
    names = ["", *POCKETCAL_MODULES]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_production_levels(self):
        configure_logging(debug_mode=False)
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("pocketcal.calendar.ics_decoder").level == logging.INFO

    def test_debug_mode(self):
        configure_logging(debug_mode=True)
        assert logging.getLogger("pocketcal.domain.event_store").level == logging.DEBUG

    def test_env_debug(self, monkeypatch):
        monkeypatch.setenv("POCKETCAL_DEBUG", "yes")
        configure_logging()
        assert logging.getLogger("pocketcal").level == logging.DEBUG

    def test_force_debug_overrides_env(self, monkeypatch):
        monkeypatch.setenv("POCKETCAL_DEBUG", "1")
        configure_logging(force_debug=False)
        assert logging.getLogger("pocketcal").level == logging.INFO

    def test_env_log_level_sets_root(self, monkeypatch):
        monkeypatch.setenv("POCKETCAL_LOG_LEVEL", "warning")
        configure_logging()
        assert logging.getLogger().level == logging.WARNING


def test_get_logging_status():
    configure_logging(debug_mode=True)
    status = get_logging_status()
    assert status["pocketcal"] == "DEBUG"
    assert set(POCKETCAL_MODULES) <= set(status)
    assert "root" in status


class TestInitLogging:
    """Tests for pocketcal._init_logging()."""

    def test_level_from_name(self):
        _init_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_defaults_to_info(self):
        _init_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_debug_env_forces_debug(self, monkeypatch):
        monkeypatch.setenv("POCKETCAL_DEBUG", "on")
        _init_logging("ERROR")
        assert logging.getLogger().level == logging.DEBUG
