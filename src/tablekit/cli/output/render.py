"""Text rendering for tables.

``render_table`` is a pure function of a ``Table`` and a ``RenderConfig``:
it computes column widths once and returns the complete text block. It
performs no I/O.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from rich.cells import cell_len, set_cell_size

from tablekit.cli.output.table import Alignment, Table, TableStyle
from tablekit.cli.output.terminal import DEFAULT_TERMINAL_WIDTH, bold
from tablekit.cli.output.widths import allocate_widths

ELLIPSIS = "..."
PLAIN_GAP = "   "
COMPACT_GAP = " "
MARKDOWN_PIPE = "\\|"


@dataclass(frozen=True)
class RenderConfig:
    """Per-call rendering parameters.

    Attributes:
        max_width: Total width available for the table.
        color_enabled: Emit ANSI bold for headers.
    """

    max_width: int = DEFAULT_TERMINAL_WIDTH
    color_enabled: bool = False

    def __post_init__(self) -> None:
        if self.max_width < 1:
            object.__setattr__(self, "max_width", 1)


def truncate(content: str, width: int) -> str:
    """Cut ``content`` to exactly ``width`` cells, ending in an ellipsis."""
    if cell_len(content) <= width:
        return content
    if width < len(ELLIPSIS):
        return ELLIPSIS[:width]
    return set_cell_size(content, width - len(ELLIPSIS)) + ELLIPSIS


def format_cell(content: str, width: int, alignment: Alignment) -> str:
    """Truncate and pad ``content`` to ``width`` cells.

    When centering, an odd amount of padding puts the extra space on the right.
    """
    content = truncate(content, width)
    padding = max(width - cell_len(content), 0)
    if alignment == Alignment.RIGHT:
        return " " * padding + content
    if alignment == Alignment.CENTER:
        left = padding // 2
        return " " * left + content + " " * (padding - left)
    return content + " " * padding


def style_overhead(style: TableStyle, column_count: int) -> int:
    """Width taken by separators and borders for ``column_count`` columns."""
    if column_count == 0:
        return 0
    gaps = column_count - 1
    if style == TableStyle.COMPACT:
        return gaps * len(COMPACT_GAP)
    if style == TableStyle.PLAIN:
        return gaps * len(PLAIN_GAP)
    # "│ " + " │ " between cells + " │"
    return gaps * 3 + 4


CellFormatter = Callable[[str, int, Alignment], str]


def _formatted_rows(
    table: Table, widths: list[int], fmt: CellFormatter = format_cell
) -> list[list[str]]:
    return [
        [
            fmt(cell, width, column.alignment)
            for cell, width, column in zip(table.cells(row), widths, table.columns, strict=True)
        ]
        for row in table.rows
    ]


def _formatted_header(
    table: Table, widths: list[int], fmt: CellFormatter = format_cell
) -> list[str]:
    return [
        fmt(column.header, width, column.alignment)
        for column, width in zip(table.columns, widths, strict=True)
    ]


def _render_plain(table: Table, widths: list[int], color: bool) -> list[str]:
    lines = [bold(PLAIN_GAP.join(_formatted_header(table, widths)), color)]
    lines.append(PLAIN_GAP.join("-" * width for width in widths))
    lines.extend(PLAIN_GAP.join(cells) for cells in _formatted_rows(table, widths))
    return lines


def _render_bordered(table: Table, widths: list[int], color: bool) -> list[str]:
    def rule(left: str, middle: str, right: str) -> str:
        return left + middle.join("─" * (width + 2) for width in widths) + right

    def line(cells: list[str]) -> str:
        return "│" + "".join(f" {cell} │" for cell in cells)

    lines = [rule("┌", "┬", "┐")]
    lines.append(line([bold(cell, color) for cell in _formatted_header(table, widths)]))
    lines.append(rule("├", "┼", "┤"))
    lines.extend(line(cells) for cells in _formatted_rows(table, widths))
    lines.append(rule("└", "┴", "┘"))
    return lines


def _delimiter(width: int, alignment: Alignment) -> str:
    if alignment == Alignment.RIGHT:
        return "-" * max(width - 1, 1) + ":"
    if alignment == Alignment.CENTER:
        return ":" + "-" * max(width - 2, 1) + ":"
    return ":" + "-" * max(width - 1, 1)


def escape_markdown_cell(content: str) -> str:
    """Escape pipes so a cell cannot add columns to a Markdown row."""
    return content.replace("|", MARKDOWN_PIPE)


def _markdown_table(table: Table) -> Table:
    """Copy of ``table`` with escaped headers and cells, used for Markdown widths."""
    return Table(
        [replace(column, header=escape_markdown_cell(column.header)) for column in table.columns],
        style=table.style,
        rows=[[escape_markdown_cell(cell) for cell in table.cells(row)] for row in table.rows],
    )


def _format_markdown_cell(content: str, width: int, alignment: Alignment) -> str:
    # Never cut an escaped pipe in half
    if cell_len(content) > width >= len(ELLIPSIS):
        kept = set_cell_size(content, width - len(ELLIPSIS))
        if kept.endswith("\\") and content.startswith(kept + "|"):
            kept = kept[:-1] + " "
        content = kept + ELLIPSIS
    return format_cell(content, width, alignment)


def _render_markdown(table: Table, widths: list[int], color: bool) -> list[str]:
    def line(cells: list[str]) -> str:
        return "|" + "".join(f" {cell} |" for cell in cells)

    lines = [line(_formatted_header(table, widths, _format_markdown_cell))]
    lines.append(
        line(
            [
                _delimiter(width, column.alignment)
                for column, width in zip(table.columns, widths, strict=True)
            ]
        )
    )
    lines.extend(line(cells) for cells in _formatted_rows(table, widths, _format_markdown_cell))
    return lines


def _render_compact(table: Table, widths: list[int], color: bool) -> list[str]:
    return [COMPACT_GAP.join(cells).rstrip() for cells in _formatted_rows(table, widths)]


_RENDERERS: dict[TableStyle, Callable[[Table, list[int], bool], list[str]]] = {
    TableStyle.PLAIN: _render_plain,
    TableStyle.BORDERED: _render_bordered,
    TableStyle.MARKDOWN: _render_markdown,
    TableStyle.COMPACT: _render_compact,
}


def render_table(table: Table, config: RenderConfig) -> str:
    """Render ``table`` in its style.

    Args:
        table: The table to render. It is not modified.
        config: Available width and whether to use color.

    Returns:
        The rendered text, one ``\\n``-terminated line per table line. A table
        without columns renders as an empty string.
    """
    if not table.columns:
        return ""
    if table.style == TableStyle.MARKDOWN:
        table = _markdown_table(table)

    widths = allocate_widths(
        table.columns,
        table.rows,
        config.max_width,
        overhead=style_overhead(table.style, len(table.columns)),
    )
    lines = _RENDERERS[table.style](table, widths, config.color_enabled)
    return "".join(f"{line}\n" for line in lines)
