"""
Tests for logging configuration.
"""

import logging
from pathlib import Path

import pytest

from envstrap.core.observability.logging_config import resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_default_warning(self):
        assert resolve_level() == "WARNING"

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ENVSTRAP_LOG_LEVEL", "INFO")
        assert resolve_level() == "INFO"

    def test_flags_beat_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ENVSTRAP_LOG_LEVEL", "INFO")
        assert resolve_level(quiet=True) == "ERROR"

    def test_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_repeat_calls_do_not_stack_handlers(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        assert len(logging.getLogger().handlers) == 1

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "envstrap.log"
        setup_logging("ERROR", log_file=str(log_file), log_file_level="DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("envstrap.test").debug("written to file only")
        for handler in root.handlers:
            handler.flush()

        assert "written to file only" in log_file.read_text()
