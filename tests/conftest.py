"""Shared pytest fixtures for tablekit tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

from tablekit.cli.main import app
from tablekit.cli.output import Alignment, Column, Table

# Variables that change color and width detection
TERMINAL_ENV_VARS = ("NO_COLOR", "FORCE_COLOR", "CLICOLOR", "CLICOLOR_FORCE", "COLUMNS")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_app() -> typer.Typer:
    """Return the CLI app for testing."""
    return app


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("TABLEKIT_"):
            monkeypatch.delenv(key, raising=False)
    for key in TERMINAL_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path: Path) -> Generator[None]:
    """Send file logs to a temporary directory and drop added handlers."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    log_dir = tmp_path / "logs"
    with (
        patch("tablekit.logging.config.LOG_DIR", log_dir),
        patch("tablekit.logging.config.LOG_FILE", log_dir / "tablekit.log"),
        patch("tablekit.logging.config._console_handler", None),
        patch("tablekit.logging.config._file_handler", None),
    ):
        yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers


@pytest.fixture
def sample_table() -> Table:
    """Two-column table used across rendering tests."""
    table = Table([Column("Name"), Column("Value")])
    table.add_row("foo", "123")
    table.add_row("bar", "456")
    return table


@pytest.fixture
def mixed_table() -> Table:
    """Table with one column per alignment."""
    table = Table(
        [
            Column("Left"),
            Column("Right", alignment=Alignment.RIGHT),
            Column("Center", alignment=Alignment.CENTER),
        ]
    )
    table.add_row("a", "1", "x")
    table.add_row("bbbb", "22", "yy")
    return table


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    """Create a small CSV file."""
    path = tmp_path / "data.csv"
    path.write_text("name,size,kind\nalpha,10,file\nbeta,2048,dir\n")
    return path
