"""Render command for displaying tabular data."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from tablekit.cli.commands.base import (
    ColorOption,
    OutputOption,
    QuietOption,
    StyleOption,
    WidthOption,
    handle_error,
)
from tablekit.cli.output import (
    Alignment,
    ColorChoice,
    Column,
    OutputConfig,
    Table,
    get_formatter,
)
from tablekit.cli.output.progress import Spinner
from tablekit.core.config import OutputSettings
from tablekit.core.readers import InputFormat, Records, read_path
from tablekit.exceptions import ConfigurationError, TablekitError
from tablekit.logging import get_logger, set_console_colors

logger = get_logger(__name__)


def _column_index(headers: list[str], key: str, option: str) -> int:
    """Resolve a column reference by header name or 1-based position."""
    if key in headers:
        return headers.index(key)
    if key.isdigit() and 1 <= int(key) <= len(headers):
        return int(key) - 1
    raise ConfigurationError(
        f"Unknown column '{key}' in {option}",
        hint=f"Available columns: {', '.join(headers)}",
    )


def _parse_assignments(values: list[str] | None, option: str) -> list[tuple[str, str]]:
    pairs = []
    for value in values or []:
        key, sep, setting = value.rpartition("=")
        if not sep or not key or not setting:
            raise ConfigurationError(
                f"Invalid {option} value '{value}'",
                hint=f"Use {option} COLUMN=VALUE.",
            )
        pairs.append((key, setting))
    return pairs


def _load(file: Path | None, input_format: InputFormat) -> Records:
    """Read the input, showing a spinner on stderr while a named file loads."""
    if file is None or str(file) == "-":
        return read_path(file, input_format)
    with Spinner(f"Reading {file}"):
        return read_path(file, input_format)


def build_table(
    headers: list[str],
    rows: list[list[str]],
    settings: OutputSettings,
    select: str | None = None,
    align: list[str] | None = None,
    max_col_width: list[str] | None = None,
) -> Table:
    """Build a Table from loaded records and command-line column options.

    Raises:
        ConfigurationError: If an option names an unknown column or has a bad value.
    """
    order = list(range(len(headers)))
    if select:
        keys = [key.strip() for key in select.split(",") if key.strip()]
        order = [_column_index(headers, key, "--columns") for key in keys]

    alignments: dict[int, Alignment] = {}
    for key, value in _parse_assignments(align, "--align"):
        try:
            alignments[_column_index(headers, key, "--align")] = Alignment(value.lower())
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid alignment '{value}' for column '{key}'",
                hint="Use left, right, or center.",
            ) from e

    max_widths: dict[int, int] = {}
    for key, value in _parse_assignments(max_col_width, "--max-col-width"):
        if not value.isdigit():
            raise ConfigurationError(f"Invalid width '{value}' for column '{key}'")
        max_widths[_column_index(headers, key, "--max-col-width")] = int(value)

    table = Table(
        [
            Column(
                headers[index],
                alignment=alignments.get(index, Alignment.LEFT),
                max_width=max_widths.get(index),
            )
            for index in order
        ],
        style=settings.style,
    )
    for row in rows:
        table.add_row(*(row[index] if index < len(row) else "" for index in order))
    return table


def render(
    file: Annotated[
        Path | None,
        typer.Argument(
            help="Input file. Reads stdin when omitted or '-'.",
            show_default=False,
        ),
    ] = None,
    input_format: Annotated[
        InputFormat,
        typer.Option(
            "--input-format",
            "-i",
            help="Input format: auto (by file extension), csv, tsv, json, or yaml",
            case_sensitive=False,
        ),
    ] = InputFormat.AUTO,
    style: StyleOption = None,
    output: OutputOption = None,
    width: WidthOption = None,
    color: ColorOption = None,
    columns: Annotated[
        str | None,
        typer.Option(
            "--columns",
            "-c",
            help="Comma-separated columns to show, by name or 1-based position",
        ),
    ] = None,
    align: Annotated[
        list[str] | None,
        typer.Option(
            "--align",
            "-a",
            help="Column alignment as COLUMN=left|right|center (can be repeated)",
        ),
    ] = None,
    max_col_width: Annotated[
        list[str] | None,
        typer.Option(
            "--max-col-width",
            help="Maximum column width as COLUMN=N (can be repeated)",
        ),
    ] = None,
    quiet: QuietOption = False,
) -> None:
    """Render CSV, TSV, JSON or YAML records as a table."""
    try:
        settings = OutputSettings.from_env()
        if style is not None:
            settings = settings.model_copy(update={"style": style})

        headers, rows = _load(file, input_format)
        table = build_table(headers, rows, settings, columns, align, max_col_width)
    except (TablekitError, ValidationError) as e:
        handle_error(e)

    config = OutputConfig.detect(
        format=output or settings.output_format,
        color=color or settings.color,
        width=width or settings.width,
        quiet=quiet or settings.quiet,
    )
    if (color or settings.color) != ColorChoice.AUTO:
        set_console_colors(config.color)
    logger.info(
        "Rendering table",
        source=str(file) if file else "<stdin>",
        columns=len(table.columns),
        rows=len(table.rows),
        style=table.style.value,
        format=config.format.value,
        width=config.width,
    )

    formatter = get_formatter(config)
    if not table.columns:
        formatter.format_list([], empty_message="No records found.")
        return
    formatter.format_table(table)
