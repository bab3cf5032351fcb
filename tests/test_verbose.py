"""Tests for logger setup."""

import logging
from pathlib import Path

from mtest.verbose import setup_logger


def test_logger_writes_to_debug_file(tmp_path: Path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "[" in content  # timestamp
    assert logger.level == logging.DEBUG


def test_logger_creates_parent_directories(tmp_path: Path):
    debug_file = tmp_path / "nested" / "dir" / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    assert debug_file.exists()


def test_verbose_mode_adds_stderr_handler(tmp_path: Path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    assert len(logger.handlers) == 2
    handler_types = [type(h).__name__ for h in logger.handlers]
    assert "StreamHandler" in handler_types
    assert "FileHandler" in handler_types


def test_verbose_without_file_logs_to_stderr(capsys):
    logger = setup_logger(verbose=True, logger_name="mtest_stderr_only")
    logger.debug("to stderr")

    captured = capsys.readouterr()
    assert "to stderr" in captured.err
    assert "to stderr" not in captured.out


def test_silent_logger_has_null_handler():
    logger = setup_logger(logger_name="mtest_silent")

    assert [type(h) for h in logger.handlers] == [logging.NullHandler]
    assert logger.propagate is False


def test_setup_twice_replaces_handlers(tmp_path: Path):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"
    setup_logger(first, logger_name="mtest_reused")
    logger = setup_logger(second, logger_name="mtest_reused")

    logger.debug("only second")

    assert len(logger.handlers) == 1
    assert "only second" not in first.read_text()
    assert "only second" in second.read_text()
