# tests/test_logging_conf.py
"""
Logging Configuration Tests - Unit Tests for setup_logging

This module checks where setup_logging sends records: the console handler
writes to stderr so command output on stdout stays clean, and a log file
is created when a directory is configured.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- eurofx.shared.logging_conf (setup_logging)
- pytest (testing framework)
"""
import logging  # Emitting test records

import pytest  # Testing framework for writing and running tests

from eurofx.shared.logging_conf import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_console_logs_go_to_stderr(self, capsys):
        setup_logging(level=logging.INFO, log_console=True)

        logging.getLogger("eurofx.test").info("refresh started")

        captured = capsys.readouterr()
        assert "refresh started" in captured.err
        assert captured.out == ""

    def test_fallback_handler_uses_stderr(self, capsys):
        setup_logging(level=logging.INFO, log_console=False)

        logging.getLogger("eurofx.test").warning("fetch failed")

        captured = capsys.readouterr()
        assert "fetch failed" in captured.err
        assert captured.out == ""

    def test_log_dir_writes_file(self, tmp_path, capsys):
        setup_logging(level=logging.INFO, log_dir=tmp_path / "logs", log_console=False)

        logging.getLogger("eurofx.test").info("stored 3 rates")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "stored 3 rates" in (tmp_path / "logs" / "eurofx.log").read_text(encoding="utf-8")
        assert capsys.readouterr().out == ""
