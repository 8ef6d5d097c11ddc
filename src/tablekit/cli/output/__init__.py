"""Centralized CLI output utilities.

This package provides consistent output formatting across all CLI commands.
All table rendering should use these classes to ensure uniform behavior.

Usage:
    from tablekit.cli.output import Alignment, Column, RenderConfig, Table, TableStyle

    table = Table([Column("Name"), Column("Value", alignment=Alignment.RIGHT)])
    table.add_row("foo", "123")
    print(table.render(RenderConfig(max_width=80)), end="")
"""

from tablekit.cli.output.formatters import (
    JsonFormatter,
    OutputConfig,
    OutputFormat,
    OutputFormatter,
    TextFormatter,
    YamlFormatter,
    get_formatter,
)
from tablekit.cli.output.icons import IconContext, Icons
from tablekit.cli.output.progress import Spinner, make_progress
from tablekit.cli.output.render import RenderConfig, format_cell, render_table, truncate
from tablekit.cli.output.table import Alignment, Column, Table, TableStyle
from tablekit.cli.output.terminal import (
    ColorChoice,
    detect_color_support,
    detect_unicode_support,
    resolve_color,
    strip_ansi,
    terminal_width,
)
from tablekit.cli.output.text import TextLayout
from tablekit.cli.output.widths import allocate_widths

__all__ = [
    "Alignment",
    "ColorChoice",
    "Column",
    "IconContext",
    "Icons",
    "JsonFormatter",
    "OutputConfig",
    "OutputFormat",
    "OutputFormatter",
    "RenderConfig",
    "Spinner",
    "Table",
    "TableStyle",
    "TextFormatter",
    "TextLayout",
    "YamlFormatter",
    "allocate_widths",
    "detect_color_support",
    "detect_unicode_support",
    "format_cell",
    "get_formatter",
    "make_progress",
    "render_table",
    "resolve_color",
    "strip_ansi",
    "terminal_width",
    "truncate",
]
