"""Column width allocation.

Widths are measured in terminal cells, so wide characters count double.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from rich.cells import cell_len

from tablekit.cli.output.table import Column

# Columns are never shrunk below this when fitting a table to the terminal
MIN_SHRINK_WIDTH = 5


def natural_widths(columns: Sequence[Column], rows: Sequence[Sequence[str]]) -> list[int]:
    """Compute widths before fitting to the available space.

    Each column starts at ``max(len(header), min_width)``, grows to its widest
    cell and is then capped at ``max_width`` when one is configured. Cells
    beyond the column count are ignored.
    """
    widths = [max(cell_len(column.header), column.min_width) for column in columns]

    for row in rows:
        for index, cell in enumerate(row[: len(widths)]):
            widths[index] = max(widths[index], cell_len(cell))

    for index, column in enumerate(columns):
        if column.max_width is not None:
            widths[index] = min(widths[index], column.max_width)

    return widths


def allocate_widths(
    columns: Sequence[Column],
    rows: Sequence[Sequence[str]],
    max_total: int,
    overhead: int = 0,
) -> list[int]:
    """Allocate one display width per column.

    If the natural widths plus ``overhead`` (separators and borders) exceed
    ``max_total``, every column gives up an equal share of the excess,
    rounded up, but no column drops below ``MIN_SHRINK_WIDTH``. The table may
    still overflow after that; no error is raised.

    Args:
        columns: Column definitions.
        rows: Row data, one sequence of strings per row.
        max_total: Total width available, usually the terminal width.
        overhead: Width taken by decoration between and around columns.

    Returns:
        List of widths, one per column.
    """
    widths = natural_widths(columns, rows)
    if not widths:
        return widths

    total = sum(widths) + overhead
    if total > max_total:
        reduce_by = math.ceil((total - max_total) / len(widths))
        widths = [max(width - reduce_by, MIN_SHRINK_WIDTH) for width in widths]

    return widths
