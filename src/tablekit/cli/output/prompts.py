"""Interactive prompts that refuse to block when nobody can answer.

Every prompt raises ``NotInteractiveError`` unless both stdin and stdout are
terminals, so scripted runs fail fast with a hint instead of hanging.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

from tablekit.cli.output.terminal import is_interactive
from tablekit.exceptions import TablekitError


class NotInteractiveError(TablekitError):
    """Raised when a prompt is needed but the session is not interactive."""

    def __init__(self, message: str) -> None:
        super().__init__(
            f"Cannot prompt for '{message}' in a non-interactive session",
            hint="Pass the value as an option, or use --force to skip confirmations.",
        )


def _require_terminal(message: str) -> None:
    if not is_interactive():
        raise NotInteractiveError(message)


def confirm(message: str, default: bool = False, console: Console | None = None) -> bool:
    """Ask a yes/no question."""
    _require_terminal(message)
    return Confirm.ask(message, default=default, console=console)


def text_input(
    message: str, default: str | None = None, console: Console | None = None
) -> str:
    """Ask for a line of text. An empty answer returns ``default`` when one is given."""
    _require_terminal(message)
    if default is None:
        return Prompt.ask(message, console=console)
    return Prompt.ask(message, default=default, console=console)


def password(message: str, console: Console | None = None) -> str:
    """Ask for a secret without echoing it."""
    _require_terminal(message)
    return Prompt.ask(message, password=True, console=console)


def number_input(message: str, default: int | None = None, console: Console | None = None) -> int:
    _require_terminal(message)
    if default is None:
        return IntPrompt.ask(message, console=console)
    return IntPrompt.ask(message, default=default, console=console)


def select(
    message: str,
    choices: Sequence[str],
    default: str | None = None,
    console: Console | None = None,
) -> str:
    """Ask for exactly one of ``choices``.

    Raises:
        ValueError: If ``choices`` is empty.
    """
    if not choices:
        raise ValueError("select() needs at least one choice")
    _require_terminal(message)
    return Prompt.ask(
        message,
        choices=list(choices),
        default=default if default is not None else choices[0],
        console=console,
    )


def multi_select(
    message: str,
    choices: Sequence[str],
    console: Console | None = None,
) -> list[str]:
    """Ask for any number of ``choices`` as a comma-separated answer.

    Unknown names re-prompt. An empty answer selects nothing. The result keeps
    the order of ``choices``.
    """
    _require_terminal(message)
    console = console or Console()
    listing = escape("[" + ", ".join(choices) + "]")
    while True:
        answer = Prompt.ask(
            f"{message} {listing}", default="", show_default=False, console=console
        )
        picked = {item.strip() for item in answer.split(",") if item.strip()}
        unknown = sorted(picked.difference(choices))
        if not unknown:
            return [choice for choice in choices if choice in picked]
        console.print(f"[red]Unknown choice(s): {escape(', '.join(unknown))}[/red]")
