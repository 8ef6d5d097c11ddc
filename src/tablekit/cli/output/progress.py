"""Spinners and progress bars for long-running commands.

Both draw on stderr-style consoles and stay silent when the session is not
interactive, so piped output never carries animation frames.
"""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
)
from rich.status import Status

from tablekit.cli.output.icons import IconContext
from tablekit.cli.output.terminal import is_interactive


class Spinner:
    """Indeterminate activity indicator with a final status line.

    Usage:
        with Spinner("Reading data.csv", console=err_console) as spinner:
            load()
            spinner.finish("Loaded 12 rows")

    Leaving the block without ``finish``, ``fail`` or ``warn`` stops the
    spinner silently, or marks it failed when an exception escapes.

    Args:
        message: Text shown next to the spinner.
        console: Console to draw on.
        enabled: Animate. Defaults to whether the session is interactive.
        icons: Icon set for the final status line.
    """

    def __init__(
        self,
        message: str,
        console: Console | None = None,
        enabled: bool | None = None,
        icons: IconContext | None = None,
    ) -> None:
        self.message = message
        self.console = console or Console(stderr=True)
        self.enabled = is_interactive() if enabled is None else enabled
        self.icons = icons or IconContext()
        self._status: Status | None = None

    def start(self) -> Spinner:
        if self.enabled and self._status is None:
            self._status = self.console.status(
                escape(self.message),
                spinner="dots" if self.icons.unicode else "line",
            )
            self._status.start()
        return self

    def update(self, message: str) -> None:
        self.message = message
        if self._status is not None:
            self._status.update(escape(message))

    def stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def _stop_with(self, icon: str, style: str, message: str | None) -> None:
        self.stop()
        self.console.print(f"[{style}]{escape(icon)}[/{style}] {escape(message or self.message)}")

    def finish(self, message: str | None = None) -> None:
        self._stop_with(self.icons.check(), "green", message)

    def fail(self, message: str | None = None) -> None:
        self._stop_with(self.icons.cross(), "red", message)

    def warn(self, message: str | None = None) -> None:
        self._stop_with(self.icons.warning(), "yellow", message)

    @property
    def running(self) -> bool:
        return self._status is not None

    def __enter__(self) -> Spinner:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None and self.running:
            self.fail()
        self.stop()


def make_progress(
    console: Console | None = None,
    transient: bool = True,
    enabled: bool | None = None,
) -> Progress:
    """Create a progress display with a spinner, description, bar and count.

    Add one task per unit of work; several tasks render as stacked bars.

    Args:
        console: Console to draw on (stderr by default).
        transient: Clear the bars when the display stops.
        enabled: Draw at all. Defaults to whether the session is interactive.
    """
    enabled = is_interactive() if enabled is None else enabled
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console or Console(stderr=True),
        transient=transient,
        disable=not enabled,
    )
