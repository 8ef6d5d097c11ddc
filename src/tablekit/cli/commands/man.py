"""Man command for generating roff manual pages."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from tablekit import __version__
from tablekit.cli.commands.base import ForceOption, handle_error
from tablekit.cli.manpage import find_command, iter_man_pages, render_man_page
from tablekit.cli.output import OutputConfig, OutputFormatter, TextLayout, get_formatter
from tablekit.cli.output.progress import make_progress
from tablekit.cli.output.prompts import NotInteractiveError, confirm
from tablekit.exceptions import ConfigurationError, TablekitError
from tablekit.logging import get_logger

logger = get_logger(__name__)

INSTALL_STEPS: list[tuple[str, list[str]]] = [
    ("Generate man pages:", ["tablekit man --output-dir /tmp/tablekit-man"]),
    (
        "Copy them to the system man directory:",
        ["sudo cp /tmp/tablekit-man/*.1 /usr/local/share/man/man1/"],
    ),
    (
        "Update the man database:",
        [
            "sudo mandb  # Linux",
            "sudo /usr/libexec/makewhatis /usr/local/share/man  # macOS",
        ],
    ),
    ("View a page:", ["man tablekit"]),
]


def _print_install_instructions(formatter: OutputFormatter) -> None:
    arrow = formatter.icons.arrow()
    lines = []
    for number, (description, commands) in enumerate(INSTALL_STEPS, start=1):
        lines.append(f"[bold]{number}. {escape(description)}[/bold]")
        lines.extend(f"   {arrow} {escape(command)}" for command in commands)
        lines.append("")
    lines.append("Alternatively, add the output directory to MANPATH:")
    lines.append(f'   {arrow} export MANPATH="/tmp/tablekit-man:$MANPATH"')

    layout = TextLayout(formatter.config.width, unicode=formatter.icons.unicode)
    formatter.console.print(layout.info_box("Man Page Installation", "\n".join(lines)))


def _may_write(path: Path, force: bool) -> bool:
    """Decide whether ``path`` may be written, asking when it already exists."""
    if force or not path.exists():
        return True
    try:
        return confirm(f"{path} already exists. Overwrite?", default=False)
    except NotInteractiveError as e:
        raise ConfigurationError(
            f"{path} already exists",
            hint="Use --force to overwrite.",
        ) from e


def _write_pages(
    formatter: OutputFormatter, output_dir: Path, pages: list[tuple[str, str]], force: bool
) -> int:
    """Write ``pages`` into ``output_dir`` and return how many were written.

    Every overwrite is settled before the first file is written, so a refused
    overwrite leaves the directory untouched.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    targets = []
    for filename, page in pages:
        path = output_dir / filename
        if _may_write(path, force):
            targets.append((path, page))
        else:
            formatter.message(f"Skipped: {path}")

    with make_progress(formatter.err_console) as progress:
        task = progress.add_task("Writing man pages", total=len(targets))
        for path, page in targets:
            path.write_text(page, encoding="utf-8")
            logger.debug("Wrote man page", path=str(path))
            progress.advance(task)

    for path, _ in targets:
        formatter.message(f"Generated: {path}")
    return len(targets)

def man(
    ctx: typer.Context,
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-d",
            help="Directory to write man pages to",
            file_okay=False,
        ),
    ] = Path("."),
    command: Annotated[
        str | None,
        typer.Option(
            "--command",
            "-c",
            help="Only generate the page for this subcommand (e.g. 'render')",
        ),
    ] = None,
    stdout: Annotated[
        bool,
        typer.Option(
            "--stdout",
            help="Print the page to stdout instead of writing files",
        ),
    ] = False,
    install: Annotated[
        bool,
        typer.Option(
            "--install",
            help="Print installation instructions and exit",
        ),
    ] = False,
    force: ForceOption = False,
) -> None:
    """Generate man pages for tablekit and its commands."""
    formatter = get_formatter(OutputConfig.detect(color="never"))

    if install:
        _print_install_instructions(formatter)
        return

    root = ctx.find_root().command
    prog_name = root.name or "tablekit"

    try:
        if command:
            path = command.split()
            target = find_command(root, path)
            if target is None:
                raise ConfigurationError(
                    f"Unknown command '{command}'",
                    hint="Run 'tablekit --help' to list commands.",
                )
            pages = [
                (
                    f"{'-'.join([prog_name, *path])}.1",
                    render_man_page(target, path[-1], __version__, [prog_name, *path[:-1]]),
                )
            ]
        else:
            pages = list(iter_man_pages(root, prog_name, __version__))

        if stdout:
            for _, page in pages:
                formatter.write(page)
            return

        written = _write_pages(formatter, output_dir, pages, force)
    except TablekitError as e:
        handle_error(e)

    logger.info("Man pages generated", output_dir=str(output_dir), count=written)
    formatter.success(f"Generated {written} man page(s) in {output_dir}")
