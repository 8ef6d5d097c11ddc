"""Output formatters for CLI commands.

This module implements the Strategy pattern for output formatting,
allowing commands to output tables and records as text, JSON, or YAML
through a common interface.
"""

from __future__ import annotations

import json
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TextIO

import yaml
from rich.console import Console
from rich.markup import escape

from tablekit.cli.output.icons import IconContext
from tablekit.cli.output.render import RenderConfig
from tablekit.cli.output.terminal import ColorChoice, resolve_color, terminal_width
from tablekit.cli.output.text import TextLayout

if TYPE_CHECKING:
    from tablekit.cli.output.table import Table


class OutputFormat(StrEnum):
    """Supported output formats for CLI commands."""

    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


@dataclass(frozen=True)
class OutputConfig:
    """Resolved output settings for one command invocation.

    Attributes:
        format: Output format.
        color: Emit ANSI styling.
        width: Width available for tables and wrapped text.
        quiet: Suppress informational messages (warnings and errors still print).
    """

    format: OutputFormat = OutputFormat.TEXT
    color: bool = False
    width: int = 80
    quiet: bool = False

    @classmethod
    def detect(
        cls,
        format: OutputFormat | str = OutputFormat.TEXT,
        color: ColorChoice | str = ColorChoice.AUTO,
        width: int | None = None,
        quiet: bool = False,
        stream: TextIO | None = None,
    ) -> OutputConfig:
        """Build a config, probing the terminal for anything not given.

        Args:
            format: Output format.
            color: Color choice; ``auto`` checks ``stream`` and the environment.
            width: Explicit width; read from ``stream`` when None.
            quiet: Quiet mode.
            stream: Stream the output will go to (stdout by default).
        """
        stream = sys.stdout if stream is None else stream
        return cls(
            format=OutputFormat(format),
            color=resolve_color(color, stream),
            width=width if width is not None else terminal_width(stream),
            quiet=quiet,
        )

    @property
    def render_config(self) -> RenderConfig:
        return RenderConfig(max_width=self.width, color_enabled=self.color)


def _make_console(config: OutputConfig, file: TextIO | None, stderr: bool = False) -> Console:
    return Console(
        file=file,
        stderr=stderr,
        force_terminal=config.color,
        no_color=not config.color,
        width=config.width,
        highlight=False,
    )


class OutputFormatter(ABC):
    """Abstract base class for output formatters.

    Data goes to ``console``; warnings and errors go to ``err_console`` so
    that machine-readable output on stdout stays clean.
    """

    def __init__(
        self,
        config: OutputConfig,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            config: Resolved output settings.
            console: Console for data and informational messages.
            err_console: Console for warnings and errors.
        """
        self.config = config
        self.console = console or _make_console(config, None)
        self.err_console = err_console or _make_console(config, None, stderr=True)
        self.icons = IconContext()

    @abstractmethod
    def format_table(self, table: Table) -> None:
        """Format and display a table."""

    @abstractmethod
    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        """Format and display a mapping.

        Args:
            data: Dictionary data to display.
            title: Optional heading (text output only).
        """

    @abstractmethod
    def format_list(self, items: Sequence[Any], empty_message: str = "No items.") -> None:
        """Format and display a list of items.

        Args:
            items: Items to display.
            empty_message: Message shown instead when ``items`` is empty.
        """

    def write(self, text: str) -> None:
        """Write raw text to the data console without markup or wrapping."""
        self.console.out(text, end="", highlight=False)

    def message(self, message: str) -> None:
        if not self.config.quiet:
            self.console.print(escape(message))

    def success(self, message: str) -> None:
        if not self.config.quiet:
            self.console.print(f"[green]{escape(self.icons.check())} {escape(message)}[/green]")

    def hint(self, message: str) -> None:
        if not self.config.quiet:
            icon = escape(self.icons.info())
            self.console.print(f"[cyan]{icon} Hint:[/cyan] {escape(message)}")

    def warning(self, message: str) -> None:
        icon = escape(self.icons.warning())
        self.err_console.print(f"[yellow]{icon} Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]{escape(self.icons.cross())} Error:[/red] {escape(message)}")


class TextFormatter(OutputFormatter):
    """Human-readable text output."""

    def format_table(self, table: Table) -> None:
        """Render the table in its own style at the configured width."""
        self.write(table.render(self.config.render_config))

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        """Format dictionary as aligned key/value lines."""
        layout = TextLayout(self.config.width)
        if title:
            self.write(layout.section(title).lstrip("\n"))
        lines = layout.definition_list((str(key), _scalar(value)) for key, value in data.items())
        self.write(f"{lines}\n" if lines else "")

    def format_list(self, items: Sequence[Any], empty_message: str = "No items.") -> None:
        if not items:
            self.message(empty_message)
            return
        self.write("".join(f"{item}\n" for item in items))


class JsonFormatter(OutputFormatter):
    """JSON output formatter.

    Produces indented JSON output suitable for parsing by other tools.
    """

    def _dump(self, data: Any) -> None:
        self.write(json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n")

    def format_table(self, table: Table) -> None:
        """Format table rows as a JSON array of objects keyed by header."""
        self._dump(table.to_json_rows())

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        self._dump(data)

    def format_list(self, items: Sequence[Any], empty_message: str = "No items.") -> None:
        self._dump(list(items))


class YamlFormatter(OutputFormatter):
    """YAML output formatter."""

    def _dump(self, data: Any) -> None:
        self.write(
            yaml.safe_dump(
                data,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        )

    def format_table(self, table: Table) -> None:
        self._dump(table.to_json_rows())

    def format_dict(self, data: dict[str, Any], title: str = "") -> None:
        self._dump(data)

    def format_list(self, items: Sequence[Any], empty_message: str = "No items.") -> None:
        self._dump(list(items))


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "-"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def get_formatter(
    config: OutputConfig,
    console: Console | None = None,
    err_console: Console | None = None,
) -> OutputFormatter:
    """Factory function to get the appropriate formatter.

    Args:
        config: Resolved output settings; ``config.format`` picks the class.
        console: Optional console for data output.
        err_console: Optional console for warnings and errors.

    Returns:
        OutputFormatter instance for the requested format.

    Example:
        >>> formatter = get_formatter(OutputConfig(format=OutputFormat.JSON))
        >>> formatter.format_table(table)
    """
    formatters: dict[OutputFormat, type[OutputFormatter]] = {
        OutputFormat.TEXT: TextFormatter,
        OutputFormat.JSON: JsonFormatter,
        OutputFormat.YAML: YamlFormatter,
    }

    formatter_class = formatters.get(config.format, TextFormatter)
    return formatter_class(config, console, err_console)
