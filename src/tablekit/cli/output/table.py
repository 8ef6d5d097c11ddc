"""Column/row model for text tables.

A Table holds immutable column definitions, rows of strings, and the style it
renders in. Rendering lives in ``tablekit.cli.output.render``; the table never
changes as a result of being rendered.

Rows are tolerant of shape mismatches: missing cells render as empty strings
and cells beyond the column count are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from tablekit.cli.output.terminal import strip_ansi

if TYPE_CHECKING:
    from tablekit.cli.output.render import RenderConfig

# Characters that would split one row across several output lines
_LINE_BREAKS = str.maketrans({"\n": " ", "\r": " ", "\t": " "})


class Alignment(StrEnum):
    """Horizontal alignment of text within a cell."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


class TableStyle(StrEnum):
    """Visual style used when rendering a table."""

    PLAIN = "plain"
    BORDERED = "bordered"
    MARKDOWN = "markdown"
    COMPACT = "compact"


@dataclass(frozen=True)
class Column:
    """Table column definition.

    Attributes:
        header: Header text.
        alignment: How cell content is padded to the column width.
        min_width: Lower bound for the column width. Negative values count as 0.
        max_width: Optional upper bound; longer content is truncated with an
            ellipsis. Negative values count as unset.
    """

    header: str
    alignment: Alignment = Alignment.LEFT
    min_width: int = 0
    max_width: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "header", normalize_cell(self.header))
        object.__setattr__(self, "alignment", Alignment(self.alignment))
        if self.min_width < 0:
            object.__setattr__(self, "min_width", 0)
        if self.max_width is not None and self.max_width < 0:
            object.__setattr__(self, "max_width", None)


def normalize_cell(value: Any) -> str:
    """Convert a cell value to a single-line string without ANSI escapes."""
    if value is None:
        return ""
    return strip_ansi(str(value)).translate(_LINE_BREAKS)


@dataclass
class Table:
    """A table of string cells with a fixed set of columns.

    Usage:
        table = Table([Column("Name"), Column("Value", alignment=Alignment.RIGHT)])
        table.add_row("foo", 123)
        print(table.render(RenderConfig(max_width=80)), end="")
    """

    columns: list[Column]
    style: TableStyle = TableStyle.PLAIN
    rows: list[list[str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.columns = [c if isinstance(c, Column) else Column(str(c)) for c in self.columns]
        self.style = TableStyle(self.style)
        self.rows = [[normalize_cell(cell) for cell in row] for row in self.rows]

    @classmethod
    def from_headers(cls, headers: Iterable[str], style: TableStyle = TableStyle.PLAIN) -> Table:
        """Create a table with default (left-aligned, unbounded) columns."""
        return cls([Column(header) for header in headers], style=style)

    @property
    def headers(self) -> list[str]:
        """Header text of every column, in order."""
        return [column.header for column in self.columns]

    def add_row(self, *cells: Any) -> None:
        """Append a row. Values are converted to strings, None becomes ""."""
        self.rows.append([normalize_cell(cell) for cell in cells])

    def add_rows(self, rows: Iterable[Iterable[Any]]) -> None:
        """Append several rows."""
        for row in rows:
            self.add_row(*row)

    def cells(self, row: list[str]) -> list[str]:
        """Return ``row`` fitted to the column count.

        Missing cells are padded with empty strings; extra cells are dropped.
        """
        count = len(self.columns)
        fitted = row[:count]
        fitted.extend([""] * (count - len(fitted)))
        return fitted

    def render(self, config: RenderConfig | None = None) -> str:
        """Render the table to a string. See ``render_table``."""
        from tablekit.cli.output.render import RenderConfig, render_table

        return render_table(self, config or RenderConfig())

    def to_json_rows(self) -> list[dict[str, str]]:
        """Convert rows to JSON-serializable dictionaries keyed by header."""
        headers = self.headers
        return [dict(zip(headers, self.cells(row), strict=True)) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)
