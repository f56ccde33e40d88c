"""Tests for logging setup."""
import logging

import pytest

from egg.config.logging_config import get_logger, set_level, setup_logging

pytestmark = pytest.mark.usefixtures("restore_root_logging")


def test_setup_logging_sets_root_level():
    setup_logging("DEBUG")
    assert logging.getLogger().level == logging.DEBUG

def test_setup_logging_unknown_level_falls_back_to_warning():
    setup_logging("nonsense")
    assert logging.getLogger().level == logging.WARNING

def test_setup_logging_defaults_to_stderr(capsys):
    setup_logging("INFO")
    get_logger("egg.test").info("to stderr")
    captured = capsys.readouterr()
    assert "to stderr" in captured.err
    assert "to stderr" not in captured.out

def test_setup_logging_to_file_creates_directory(tmp_path):
    log_file = tmp_path / "logs" / "egg.log"
    setup_logging("INFO", str(log_file))
    get_logger("egg.test").info("written to file")
    for handler in logging.getLogger().handlers:
        handler.flush()
    content = log_file.read_text()
    assert "egg.test - INFO - written to file" in content

def test_set_level():
    setup_logging("WARNING")
    set_level("debug")
    assert logging.getLogger().level == logging.DEBUG
    set_level("WARNING")
    assert logging.getLogger().level == logging.WARNING

def test_get_logger_returns_named_logger():
    assert get_logger("egg.some.module").name == "egg.some.module"
