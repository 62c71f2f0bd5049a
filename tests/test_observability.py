"""
Tests for logging configuration.
"""

import logging

import pytest

from hostcap.core.observability.logging_config import (
    LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flags_win(self, monkeypatch):
        monkeypatch.setenv(LEVEL_ENV, "ERROR")
        assert resolve_level(debug=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_env_beats_settings(self, monkeypatch):
        monkeypatch.setenv(LEVEL_ENV, "INFO")
        assert resolve_level(configured="ERROR") == "INFO"

    def test_settings_then_default(self, monkeypatch):
        monkeypatch.delenv(LEVEL_ENV, raising=False)
        assert resolve_level(configured="DEBUG") == "DEBUG"
        assert resolve_level() == "WARNING"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_bad_level_falls_back(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_library_loggers_left_alone(self):
        setup_logging("DEBUG")
        assert logging.getLogger("yaml").level == logging.NOTSET
        assert logging.getLogger("yaml").getEffectiveLevel() == logging.DEBUG

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "hostcap.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("hostcap.test").debug("probe detail")
        for h in root.handlers:
            h.flush()
        assert "probe detail" in log_file.read_text()
        for h in root.handlers:
            if isinstance(h, logging.FileHandler):
                h.close()
