"""Terminal capability detection and ANSI helpers.

These are the only places that look at the process environment. Everything
downstream receives the answers as plain values (see ``RenderConfig`` and
``OutputConfig``) so rendering stays deterministic.
"""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping
from enum import StrEnum
from typing import TextIO

DEFAULT_TERMINAL_WIDTH = 80

ANSI_BOLD = "\x1b[1m"
ANSI_RESET = "\x1b[0m"

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")


class ColorChoice(StrEnum):
    """When to emit ANSI colors."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def _is_tty(stream: TextIO | None) -> bool:
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def terminal_width(
    stream: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Return the terminal width in columns.

    A positive integer in ``COLUMNS`` wins. Otherwise the size of the terminal
    attached to ``stream`` (stdout by default) is used, falling back to
    ``DEFAULT_TERMINAL_WIDTH`` when no terminal is attached.
    """
    env = os.environ if environ is None else environ
    columns = env.get("COLUMNS", "").strip()
    if columns.isdigit() and int(columns) > 0:
        return int(columns)

    stream = sys.stdout if stream is None else stream
    if not _is_tty(stream):
        return DEFAULT_TERMINAL_WIDTH
    try:
        width = os.get_terminal_size(stream.fileno()).columns
    except (OSError, ValueError):
        return DEFAULT_TERMINAL_WIDTH
    return width or DEFAULT_TERMINAL_WIDTH


def _flag_enabled(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() not in ("0", "false", "no", "off")


def detect_color_support(
    environ: Mapping[str, str] | None = None,
    is_tty: bool = False,
) -> bool:
    """Decide whether ANSI colors should be emitted.

    Priority order:
    1. ``NO_COLOR`` set to anything non-empty disables color
    2. ``FORCE_COLOR`` or ``CLICOLOR_FORCE`` (non-empty, not "0") enables it
    3. ``CLICOLOR=0`` disables it
    4. A missing ``TERM`` or ``TERM=dumb`` disables it
    5. Otherwise color follows ``is_tty``
    """
    env = os.environ if environ is None else environ

    if env.get("NO_COLOR"):
        return False
    if _flag_enabled(env.get("FORCE_COLOR")) or _flag_enabled(env.get("CLICOLOR_FORCE")):
        return True
    if env.get("CLICOLOR", "").strip() == "0":
        return False
    term = env.get("TERM", "")
    if not term or term == "dumb":
        return False
    return is_tty


def resolve_color(
    choice: ColorChoice | str = ColorChoice.AUTO,
    stream: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    """Resolve a ``ColorChoice`` to a yes/no answer for ``stream``."""
    choice = ColorChoice(choice)
    if choice == ColorChoice.ALWAYS:
        return True
    if choice == ColorChoice.NEVER:
        return False
    stream = sys.stdout if stream is None else stream
    return detect_color_support(environ, is_tty=_is_tty(stream))


def detect_unicode_support(environ: Mapping[str, str] | None = None) -> bool:
    """Guess whether the terminal can display non-ASCII symbols."""
    env = os.environ if environ is None else environ
    if "linux" in env.get("TERM", ""):
        return False
    for name in ("LC_ALL", "LC_CTYPE", "LANG"):
        value = env.get(name)
        if value:
            return "UTF" in value.upper()
    return True


def is_interactive() -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    return _is_tty(sys.stdin) and _is_tty(sys.stdout)


def bold(text: str, enabled: bool = True) -> str:
    """Wrap ``text`` in ANSI bold when ``enabled``."""
    if not enabled:
        return text
    return f"{ANSI_BOLD}{text}{ANSI_RESET}"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_ESCAPE.sub("", text)
