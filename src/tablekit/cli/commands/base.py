"""Base utilities for tablekit CLI commands.

This module provides common Typer options, error handling utilities,
and shared functionality for all commands.
"""

from __future__ import annotations

from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from tablekit.cli.output import ColorChoice, OutputFormat, TableStyle
from tablekit.exceptions import TablekitError

# Errors go to stderr so stdout stays parseable
err_console = Console(stderr=True)


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

OutputOption = Annotated[
    OutputFormat | None,
    typer.Option(
        "--output",
        "-o",
        help="Output format: text, json, or yaml",
        case_sensitive=False,
        show_default=False,
    ),
]

StyleOption = Annotated[
    TableStyle | None,
    typer.Option(
        "--style",
        "-s",
        help="Table style: plain, bordered, markdown, or compact",
        case_sensitive=False,
        show_default=False,
    ),
]

ColorOption = Annotated[
    ColorChoice | None,
    typer.Option(
        "--color",
        help="When to use terminal colors: auto, always, or never",
        case_sensitive=False,
        show_default=False,
    ),
]

WidthOption = Annotated[
    int | None,
    typer.Option(
        "--width",
        "-w",
        help="Maximum table width (defaults to the terminal width)",
        min=1,
    ),
]

QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Suppress informational messages",
    ),
]

ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Skip confirmation prompts",
    ),
]


# =============================================================================
# Error Handling
# =============================================================================


def handle_error(error: TablekitError | ValidationError) -> NoReturn:
    """Report an error to the user and exit.

    Args:
        error: The error to report.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    if isinstance(error, ValidationError):
        err_console.print("[red]Error:[/red] Invalid settings")
        for detail in error.errors():
            location = ".".join(str(part) for part in detail["loc"])
            err_console.print(f"  {escape(location)}: {escape(detail['msg'])}")
        err_console.print(
            "\n[dim]Hint: Check the TABLEKIT_* environment variables.[/dim]",
        )
    else:
        err_console.print(f"[red]Error:[/red] {escape(str(error))}")
        if error.hint:
            err_console.print(f"\n[dim]Hint: {escape(error.hint)}[/dim]")

    raise typer.Exit(1)
