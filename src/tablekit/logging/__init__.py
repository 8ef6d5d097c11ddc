"""Logging configuration for tablekit."""

from tablekit.logging.config import configure_logging, get_logger, set_console_colors

__all__ = ["configure_logging", "get_logger", "set_console_colors"]
