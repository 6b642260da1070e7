"""Tests for the logging setup helpers."""

import logging
import os
import time

import pytest

from eventemitter.lib.logger import PaddedLevelFormatter, clean_old_logs, configure_logger


@pytest.fixture
def installed():
    """Handlers installed by configure_logger; removed from the root logger afterwards."""
    root = logging.getLogger()
    level = root.level
    handlers = []
    yield handlers
    for handler in handlers:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


def test_clean_old_logs_keeps_newest(tmp_path):
    now = time.time()
    for i in range(4):
        path = tmp_path / f"{i}.log"
        path.write_text("x")
        os.utime(path, (now + i, now + i))

    clean_old_logs(tmp_path, max_files=2)

    assert sorted(p.name for p in tmp_path.glob("*.log")) == ["2.log", "3.log"]


def test_clean_old_logs_ignores_other_files(tmp_path):
    (tmp_path / "keep.txt").write_text("x")
    (tmp_path / "a.log").write_text("x")

    clean_old_logs(tmp_path, max_files=0)

    assert [p.name for p in tmp_path.iterdir()] == ["keep.txt"]


def test_configure_logger_console_only(installed):
    handlers = configure_logger(logging.WARNING)
    installed.extend(handlers)

    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert logging.getLogger().level == logging.WARNING


def test_configure_logger_writes_log_file(tmp_path, installed):
    log_dir = tmp_path / "logs"

    handlers = configure_logger(logging.DEBUG, log_dir=log_dir)
    installed.extend(handlers)
    logging.debug("Added listener to event << data >>")
    for handler in handlers:
        handler.flush()

    (log_file,) = log_dir.glob("*.log")
    assert "Added listener to event << data >>" in log_file.read_text()


def test_configure_logger_trims_old_files(tmp_path, installed):
    for i in range(5):
        (tmp_path / f"old{i}.log").write_text("x")

    installed.extend(configure_logger(logging.INFO, log_dir=tmp_path, max_log_files=3))

    assert len(list(tmp_path.glob("*.log"))) == 3


def test_custom_formatter_pads_level_name():
    formatter = PaddedLevelFormatter("%(levelname)s|%(message)s")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)
    assert formatter.format(record) == "INFO    |hello"


def test_padded_formatter_leaves_record_unchanged():
    formatter = PaddedLevelFormatter("%(levelname)s|%(message)s")
    record = logging.LogRecord("test", logging.WARNING, __file__, 1, "hello", None, None)

    formatter.format(record)

    assert record.levelname == "WARNING"
    assert logging.Formatter("%(levelname)s|%(message)s").format(record) == "WARNING|hello"


def test_clean_old_logs_returns_deleted_files(tmp_path):
    now = time.time()
    for i in range(3):
        path = tmp_path / f"{i}.log"
        path.write_text("x")
        os.utime(path, (now + i, now + i))

    deleted = clean_old_logs(tmp_path, max_files=1)

    assert sorted(p.name for p in deleted) == ["0.log", "1.log"]
