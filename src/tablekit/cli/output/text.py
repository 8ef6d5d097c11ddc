"""Text layout helpers for non-tabular CLI output."""

from __future__ import annotations

from collections.abc import Iterable

from rich import box
from rich.cells import cell_len
from rich.panel import Panel

from tablekit.cli.output.terminal import detect_unicode_support

KEY_COLUMN_MAX = 20


class TextLayout:
    """Formats headings, key/value lists and boxes for a given width.

    Args:
        width: Target line width.
        unicode: Draw boxes with Unicode line characters. When None, the
            environment is checked.
    """

    def __init__(self, width: int = 80, unicode: bool | None = None) -> None:
        self.width = max(width, 1)
        self.unicode = detect_unicode_support() if unicode is None else unicode

    def key_value(self, key: str, value: str) -> str:
        key_width = min(KEY_COLUMN_MAX, self.width // 3)
        return f"{key:<{key_width}} {value}"

    def section(self, title: str) -> str:
        return f"\n{title}\n{'=' * cell_len(title)}\n"

    def definition_list(self, items: Iterable[tuple[str, str]]) -> str:
        return "\n".join(self.key_value(key, value) for key, value in items)

    def info_box(self, title: str, content: str, border_style: str = "cyan") -> Panel:
        """Box ``content`` under ``title``. The console width bounds the box."""
        return Panel(
            content,
            title=title,
            title_align="left",
            border_style=border_style,
            box=box.ROUNDED if self.unicode else box.ASCII,
            expand=False,
        )
