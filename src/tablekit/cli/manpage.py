"""Man page generation from the Typer command tree.

Typer builds a Click-style command for the application; this module walks
that tree and writes one roff page per visible command. Commands are
inspected by interface (``list_commands``, ``get_params``) rather than by
class, since Typer may ship its own copy of Click.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum
from typing import Any

from typer.core import TyperCommand, TyperGroup

from tablekit.core.config.models import ENV_PREFIX

Command = TyperCommand | TyperGroup

MANUAL_NAME = "tablekit Manual"
SECTION = "1"

ENVIRONMENT: list[tuple[str, str]] = [
    (f"{ENV_PREFIX}STYLE", "Default table style: plain, bordered, markdown or compact."),
    (f"{ENV_PREFIX}OUTPUT", "Default output format: text, json or yaml."),
    (f"{ENV_PREFIX}COLOR", "Default color choice: auto, always or never."),
    (f"{ENV_PREFIX}WIDTH", "Table width in columns, overriding terminal detection."),
    (f"{ENV_PREFIX}QUIET", "Suppress informational messages when set to 1, true or yes."),
    ("NO_COLOR", "Disable colored output when set to any non-empty value."),
    ("FORCE_COLOR", "Enable colored output even when stdout is not a terminal."),
    ("CLICOLOR_FORCE", "Same as FORCE_COLOR."),
    ("COLUMNS", "Terminal width used when no width is given."),
]

EXAMPLES: list[tuple[str, str]] = [
    ("Render a CSV file as a bordered table:", "tablekit render data.csv --style bordered"),
    ("Convert JSON records to a Markdown table:", "tablekit render records.json -s markdown"),
    ("Right-align a numeric column:", "tablekit render data.csv --align size=right"),
    ("Emit rows as JSON for other tools:", "tablekit render data.csv --output json"),
]


def roff_escape(text: str) -> str:
    """Escape ``text`` for use in a roff document."""
    text = text.replace("\\", "\\e")
    return "\n".join(
        f"\\&{line}" if line.startswith((".", "'")) else line for line in text.splitlines()
    )


def _roff_option(name: str) -> str:
    return name.replace("-", "\\-")


def _is_group(command: Command | None) -> bool:
    return command is not None and hasattr(command, "list_commands")


def _context(command: Command, info_name: str) -> Any:
    return command.context_class(command, info_name=info_name)


def _metavar(option: Any) -> str:
    if option.metavar:
        return option.metavar
    choices = getattr(option.type, "choices", None)
    if choices:
        return "[" + "|".join(str(getattr(c, "value", c)) for c in choices) + "]"
    return option.type.name.upper()


def _format_default(param: Any) -> str | None:
    default = param.default
    if getattr(param, "is_flag", False):
        return None
    if default is None or default == () or default == [] or callable(default):
        return None
    if isinstance(default, Enum):
        default = default.value
    return str(default)


def _visible_subcommands(command: Command, ctx: Any) -> list[tuple[str, Command]]:
    if not _is_group(command):
        return []
    result = []
    for name in command.list_commands(ctx):
        sub = command.get_command(ctx, name)
        if sub is not None and not sub.hidden:
            result.append((name, sub))
    return result


def render_man_page(
    command: Command,
    prog_name: str,
    version: str,
    parents: Sequence[str] = (),
) -> str:
    """Render a roff man page for ``command``.

    Args:
        command: Command (or group) to document.
        prog_name: Name of this command as typed by the user.
        version: Version string shown in the page footer.
        parents: Names of the enclosing commands, outermost first.

    Returns:
        The page as roff text.
    """
    full_path = [*parents, prog_name]
    page_name = "-".join(full_path)
    ctx = _context(command, " ".join(full_path))

    lines = [f'.TH "{page_name.upper()}" "{SECTION}" "" "{prog_name} {version}" "{MANUAL_NAME}"']

    summary = command.get_short_help_str(limit=200) or command.help or ""
    lines += [".SH NAME", f"{_roff_option(page_name)} \\- {roff_escape(summary)}"]

    usage = " ".join(command.collect_usage_pieces(ctx))
    lines += [".SH SYNOPSIS", f".B {' '.join(full_path)}", roff_escape(usage)]

    if command.help:
        lines += [".SH DESCRIPTION", roff_escape(command.help.strip())]

    params = [p for p in command.get_params(ctx) if not getattr(p, "hidden", False)]
    arguments = [p for p in params if p.param_type_name == "argument"]
    options = [p for p in params if p.param_type_name == "option"]

    if arguments:
        lines.append(".SH ARGUMENTS")
        for arg in arguments:
            lines += [".TP", f"\\fB{arg.human_readable_name}\\fR"]
            help_text = getattr(arg, "help", None)
            if help_text:
                lines.append(roff_escape(help_text))

    if options:
        lines.append(".SH OPTIONS")
        for option in options:
            names = ", ".join(
                f"\\fB{_roff_option(opt)}\\fR" for opt in [*option.opts, *option.secondary_opts]
            )
            if not option.is_flag:
                names += f" \\fI{roff_escape(_metavar(option))}\\fR"
            lines += [".TP", names]
            if option.help:
                lines.append(roff_escape(option.help))
            default = _format_default(option)
            if default is not None:
                lines.append(f"Default: {roff_escape(default)}.")

    subcommands = _visible_subcommands(command, ctx)
    if subcommands:
        lines.append(".SH COMMANDS")
        for name, sub in subcommands:
            lines += [".TP", f"\\fB{name}\\fR", roff_escape(sub.get_short_help_str(limit=200))]

    if not parents:
        lines.append(".SH EXAMPLES")
        for description, example in EXAMPLES:
            lines += [".TP", roff_escape(description), ".nf", f"$ {roff_escape(example)}", ".fi"]
        lines.append(".SH ENVIRONMENT")
        for name, description in ENVIRONMENT:
            lines += [".TP", f"\\fB{name}\\fR", roff_escape(description)]

    see_also = [f"{'-'.join([*full_path, name])}({SECTION})" for name, _ in subcommands]
    if parents:
        see_also.insert(0, f"{'-'.join(full_path[:-1])}({SECTION})")
    if see_also:
        lines += [".SH SEE ALSO", ", ".join(_roff_option(ref) for ref in see_also)]

    return "\n".join(lines) + "\n"


def iter_man_pages(
    command: Command,
    prog_name: str,
    version: str,
    parents: Sequence[str] = (),
) -> Iterator[tuple[str, str]]:
    """Yield ``(filename, page)`` for ``command`` and every visible subcommand."""
    yield (
        f"{'-'.join([*parents, prog_name])}.{SECTION}",
        render_man_page(command, prog_name, version, parents),
    )
    ctx = _context(command, prog_name)
    for name, sub in _visible_subcommands(command, ctx):
        yield from iter_man_pages(sub, name, version, [*parents, prog_name])


def find_command(root: Command, path: Sequence[str]) -> Command | None:
    """Look up a nested subcommand by its names, e.g. ``["render"]``."""
    command: Command | None = root
    for name in path:
        if not _is_group(command):
            return None
        command = command.get_command(_context(command, name), name)
    return command
