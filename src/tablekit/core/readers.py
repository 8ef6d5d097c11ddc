"""Loading tabular records from CSV, TSV, JSON and YAML text.

Every reader returns ``(headers, rows)`` with all cells already converted to
strings, ready to be placed in a ``Table``.
"""

from __future__ import annotations

import csv
import io
import json
import sys
from collections.abc import Mapping, Sequence
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml

from tablekit.exceptions import InputError
from tablekit.logging import get_logger

logger = get_logger(__name__)

BOM = "\ufeff"

Records = tuple[list[str], list[list[str]]]


class InputFormat(StrEnum):
    """Supported input formats for the render command."""

    AUTO = "auto"
    CSV = "csv"
    TSV = "tsv"
    JSON = "json"
    YAML = "yaml"


_EXTENSIONS: dict[str, InputFormat] = {
    ".csv": InputFormat.CSV,
    ".tsv": InputFormat.TSV,
    ".tab": InputFormat.TSV,
    ".json": InputFormat.JSON,
    ".yaml": InputFormat.YAML,
    ".yml": InputFormat.YAML,
}


def guess_format(path: Path | None) -> InputFormat:
    """Pick an input format from a file extension, defaulting to CSV."""
    if path is None:
        return InputFormat.CSV
    return _EXTENSIONS.get(path.suffix.lower(), InputFormat.CSV)


def stringify(value: Any) -> str:
    """Convert a parsed value to cell text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def _read_delimited(text: str, delimiter: str) -> Records:
    try:
        lines = [row for row in csv.reader(io.StringIO(text), delimiter=delimiter) if row]
    except csv.Error as e:
        raise InputError(f"Malformed delimited input: {e}") from e
    if not lines:
        return [], []
    return lines[0], lines[1:]


def _records_from_data(data: Any) -> Records:
    """Convert parsed JSON/YAML data to headers and rows.

    Accepted shapes:
    - a list of mappings: headers are the union of keys in first-seen order
    - a list of lists: the first list is the header row
    - a single mapping: one row
    """
    if data is None:
        return [], []
    if isinstance(data, Mapping):
        data = [data]
    if not isinstance(data, list):
        raise InputError(
            f"Expected a list of records, got {type(data).__name__}",
            hint="Provide an array of objects or an array of arrays.",
        )
    if not data:
        return [], []

    if all(isinstance(item, Mapping) for item in data):
        headers: list[str] = []
        for item in data:
            for key in item:
                if str(key) not in headers:
                    headers.append(str(key))
        rows = [
            [stringify(_lookup(item, header)) for header in headers]
            for item in data
        ]
        return headers, rows

    if all(isinstance(item, Sequence) and not isinstance(item, str) for item in data):
        header_row, *body = data
        return (
            [stringify(cell) for cell in header_row],
            [[stringify(cell) for cell in row] for row in body],
        )

    raise InputError(
        "Records must all be objects or all be arrays",
        hint="Mixed record shapes cannot be laid out as a table.",
    )


def _lookup(item: Mapping[Any, Any], header: str) -> Any:
    if header in item:
        return item[header]
    for key, value in item.items():
        if str(key) == header:
            return value
    return None


def read_records(text: str, input_format: InputFormat | str, source: str | None = None) -> Records:
    """Parse ``text`` into headers and rows.

    Args:
        text: Raw input.
        input_format: Format of ``text``. ``auto`` is treated as CSV.
        source: Name of the input, used in error messages.

    Returns:
        Tuple of (headers, rows).

    Raises:
        InputError: If the text cannot be parsed or has an unsupported shape.
    """
    input_format = InputFormat(input_format)
    logger.debug("Reading records", format=input_format.value, source=source, size=len(text))

    try:
        if input_format in (InputFormat.AUTO, InputFormat.CSV):
            return _read_delimited(text, ",")
        if input_format == InputFormat.TSV:
            return _read_delimited(text, "\t")
        if input_format == InputFormat.JSON:
            try:
                data = json.loads(text) if text.strip() else None
            except json.JSONDecodeError as e:
                raise InputError(f"Invalid JSON: {e}") from e
            return _records_from_data(data)
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InputError(f"Invalid YAML: {e}") from e
        return _records_from_data(data)
    except InputError as e:
        if e.source is None:
            e.source = source
        raise


def read_path(path: Path | None, input_format: InputFormat | str = InputFormat.AUTO) -> Records:
    """Read records from ``path``, or from stdin when ``path`` is None or ``-``.

    Raises:
        InputError: If the file cannot be read or parsed.
    """
    input_format = InputFormat(input_format)
    if path is None or str(path) == "-":
        source = "<stdin>"
        text = sys.stdin.read().removeprefix(BOM)
        if input_format == InputFormat.AUTO:
            input_format = InputFormat.CSV
    else:
        source = str(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except FileNotFoundError as e:
            raise InputError("File not found", source=source) from e
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Cannot read file: {e}", source=source) from e
        if input_format == InputFormat.AUTO:
            input_format = guess_format(path)

    return read_records(text, input_format, source=source)
