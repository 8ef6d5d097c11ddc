"""structlog setup for the tablekit CLI.

Two handlers hang off the stdlib root logger: one on stderr, whose level
follows ``--verbose``/``--debug``, and a rotating JSON file that records
everything at DEBUG. stdout is never touched because it carries the table.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog

LOG_DIR = Path.home() / ".local" / "state" / "tablekit"
LOG_FILE = LOG_DIR / "tablekit.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5
RETENTION_DAYS = 30

# Run for structlog events and for records from plain stdlib loggers alike
SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

# Handlers installed by the last configure_logging() call
_console_handler: ConsoleLogHandler | None = None
_file_handler: RotatingFileHandler | None = None


class ConsoleLogHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """stderr handler rendering either JSON lines or human-readable events.

    Args:
        level: Minimum level to emit.
        json_output: Render one JSON object per line.
        colors: Use ANSI colors for human-readable output.
        show_locals: Include local variables in rendered tracebacks.
    """

    def __init__(
        self,
        level: int,
        json_output: bool = False,
        colors: bool = False,
        show_locals: bool = False,
    ) -> None:
        super().__init__(sys.stderr)
        self.setLevel(level)
        self.json_output = json_output
        self.show_locals = show_locals
        self.colors = False
        self.use_colors(colors)

    def use_colors(self, enabled: bool) -> None:
        """Switch ANSI colors on or off. JSON output is never colored."""
        self.colors = enabled and not self.json_output
        renderer: structlog.types.Processor
        if self.json_output:
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(
                colors=self.colors,
                exception_formatter=structlog.dev.RichTracebackFormatter(
                    show_locals=self.show_locals,
                ),
            )
        self.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=renderer,
                foreign_pre_chain=SHARED_PROCESSORS,
            )
        )


def _prune_old_logs() -> None:
    """Delete rotated log files not modified within RETENTION_DAYS."""
    if not LOG_DIR.exists():
        return
    cutoff = datetime.now() - timedelta(days=RETENTION_DAYS)
    for log_file in LOG_DIR.glob("tablekit.log*"):
        try:
            if datetime.fromtimestamp(log_file.stat().st_mtime) < cutoff:
                log_file.unlink()
        except OSError:
            pass  # Best-effort cleanup


def _make_file_handler() -> RotatingFileHandler:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    _prune_old_logs()

    handler = RotatingFileHandler(LOG_FILE, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=SHARED_PROCESSORS,
        )
    )
    return handler


def _remove_installed_handlers(root: logging.Logger) -> None:
    for handler in (_console_handler, _file_handler):
        if handler is not None and handler in root.handlers:
            root.removeHandler(handler)
            handler.close()


def configure_logging(
    verbose: bool = False,
    debug: bool = False,
    json_output: bool = False,
    colors: bool = False,
) -> None:
    """Configure structlog and the root logger's handlers.

    Calling it again replaces the handlers from the previous call.

    Args:
        verbose: Show INFO events on stderr.
        debug: Show DEBUG events on stderr, with locals in tracebacks.
        json_output: Render stderr events as JSON lines (``--log-json``).
        colors: Color human-readable stderr events.
    """
    global _console_handler, _file_handler

    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    structlog.configure(
        processors=[
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    _remove_installed_handlers(root_logger)
    root_logger.setLevel(logging.DEBUG)

    _console_handler = ConsoleLogHandler(
        log_level, json_output=json_output, colors=colors, show_locals=debug
    )
    root_logger.addHandler(_console_handler)

    _file_handler = _make_file_handler()
    root_logger.addHandler(_file_handler)


def set_console_colors(enabled: bool) -> None:
    """Override whether stderr log events are colored, e.g. for ``--color never``."""
    if _console_handler is not None:
        _console_handler.use_colors(enabled)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Return a structlog logger, optionally bound to ``initial_context``."""
    logger: structlog.BoundLogger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
