"""Unit tests for logging configuration."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest.mock import patch

import pytest

from tablekit.logging import config as logging_config
from tablekit.logging.config import (
    RETENTION_DAYS,
    ConsoleLogHandler,
    _make_file_handler,
    _prune_old_logs,
    configure_logging,
    get_logger,
    set_console_colors,
)


def _age(path: Path, days: int) -> None:
    old_time = (datetime.now() - timedelta(days=days)).timestamp()
    os.utime(path, (old_time, old_time))


def _added_handlers(before: list[logging.Handler]) -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h not in before]


@pytest.mark.unit
class TestPruneOldLogs:
    """Tests for _prune_old_logs."""

    def test_returns_early_when_log_dir_missing(self, tmp_path: Path) -> None:
        with patch("tablekit.logging.config.LOG_DIR", tmp_path / "nonexistent"):
            _prune_old_logs()

    def test_deletes_old_log_files(self, tmp_path: Path) -> None:
        log_file = tmp_path / "tablekit.log.1"
        log_file.write_text("old log data")
        _age(log_file, RETENTION_DAYS + 5)

        with patch("tablekit.logging.config.LOG_DIR", tmp_path):
            _prune_old_logs()

        assert not log_file.exists()

    def test_keeps_recent_log_files(self, tmp_path: Path) -> None:
        log_file = tmp_path / "tablekit.log"
        log_file.write_text("recent log data")

        with patch("tablekit.logging.config.LOG_DIR", tmp_path):
            _prune_old_logs()

        assert log_file.exists()

    def test_leaves_unrelated_files(self, tmp_path: Path) -> None:
        other = tmp_path / "notes.txt"
        other.write_text("keep me")
        _age(other, RETENTION_DAYS + 5)

        with patch("tablekit.logging.config.LOG_DIR", tmp_path):
            _prune_old_logs()

        assert other.exists()

    def test_ignores_os_errors(self, tmp_path: Path) -> None:
        log_file = tmp_path / "tablekit.log.1"
        log_file.write_text("data")
        _age(log_file, RETENTION_DAYS + 5)

        with (
            patch("tablekit.logging.config.LOG_DIR", tmp_path),
            patch.object(Path, "unlink", side_effect=OSError("permission denied")),
        ):
            _prune_old_logs()


@pytest.mark.unit
class TestMakeFileHandler:
    """Tests for _make_file_handler."""

    def test_creates_log_directory(self) -> None:
        handler = _make_file_handler()
        try:
            assert isinstance(handler, RotatingFileHandler)
            assert handler.level == logging.DEBUG
            assert logging_config.LOG_DIR.exists()
        finally:
            handler.close()


def _console_handlers() -> list[ConsoleLogHandler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, ConsoleLogHandler)]


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging function."""

    @pytest.mark.parametrize(
        ("kwargs", "level"),
        [
            ({}, logging.WARNING),
            ({"verbose": True}, logging.INFO),
            ({"debug": True}, logging.DEBUG),
            ({"verbose": True, "debug": True}, logging.DEBUG),
        ],
    )
    def test_console_level(self, kwargs: dict[str, bool], level: int) -> None:
        configure_logging(**kwargs)
        (handler,) = _console_handlers()
        assert handler.level == level

    def test_console_logs_go_to_stderr(self) -> None:
        configure_logging()
        (handler,) = _console_handlers()
        assert handler.stream is sys.stderr

    def test_reconfiguring_replaces_handlers(self) -> None:
        before = list(logging.getLogger().handlers)
        configure_logging()
        configure_logging(verbose=True)
        added = _added_handlers(before)
        assert len(added) == 2
        assert sum(isinstance(h, RotatingFileHandler) for h in added) == 1
        (handler,) = _console_handlers()
        assert handler.level == logging.INFO

    def test_colors_off_by_default(self) -> None:
        configure_logging()
        (handler,) = _console_handlers()
        assert handler.colors is False

    def test_colors_requested(self) -> None:
        configure_logging(colors=True)
        (handler,) = _console_handlers()
        assert handler.colors is True

    def test_plain_console_has_no_ansi(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging()
        (handler,) = _console_handlers()
        handler.stream = sys.stderr
        get_logger("tablekit.test").warning("plain event", rows=3)
        err = capsys.readouterr().err
        assert "plain event" in err
        assert "\x1b[" not in err

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True, colors=True)
        (handler,) = _console_handlers()
        assert handler.colors is False
        handler.stream = sys.stderr
        get_logger("tablekit.test").warning("json event", rows=3)
        event = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert event["event"] == "json event"
        assert event["rows"] == 3
        assert event["level"] == "warning"

    def test_writes_log_file(self) -> None:
        configure_logging(debug=True)
        logging.getLogger("tablekit.test").warning("file entry")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "file entry" in logging_config.LOG_FILE.read_text()


@pytest.mark.unit
class TestSetConsoleColors:
    """Tests for set_console_colors."""

    def test_turns_colors_off(self) -> None:
        configure_logging(colors=True)
        set_console_colors(False)
        (handler,) = _console_handlers()
        assert handler.colors is False

    def test_json_stays_uncolored(self) -> None:
        configure_logging(json_output=True)
        set_console_colors(True)
        (handler,) = _console_handlers()
        assert handler.colors is False

    def test_noop_before_configuration(self) -> None:
        set_console_colors(True)
        assert _console_handlers() == []


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_bound_logger(self) -> None:
        assert get_logger("test") is not None

    def test_binds_initial_context(self) -> None:
        logger = get_logger("test", component="render")
        assert logger is not None
