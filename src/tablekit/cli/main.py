"""Main CLI entry point using Typer."""

from __future__ import annotations

import sys

import typer
from rich.console import Console

from tablekit import __version__
from tablekit.cli.commands import man, render
from tablekit.cli.output.terminal import ColorChoice, resolve_color
from tablekit.logging.config import configure_logging

app = typer.Typer(
    name="tablekit",
    help="Render tabular data as plain, bordered, markdown or compact text tables.",
    add_completion=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tablekit version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json",
        help="Write log events to stderr as JSON lines.",
    ),
) -> None:
    """tablekit - Render tables and other CLI output for terminals and pipes."""
    configure_logging(
        verbose=verbose,
        debug=debug,
        json_output=log_json,
        colors=resolve_color(ColorChoice.AUTO, sys.stderr),
    )


# Register subcommands
app.command()(render.render)
app.command()(man.man)


if __name__ == "__main__":
    app()
