"""Tests for cli/output/table.py."""

from __future__ import annotations

import pytest

from tablekit.cli.output.table import Alignment, Column, Table, TableStyle, normalize_cell


@pytest.mark.unit
class TestColumn:
    """Tests for the Column definition."""

    def test_defaults(self) -> None:
        column = Column("Name")
        assert column.alignment == Alignment.LEFT
        assert column.min_width == 0
        assert column.max_width is None

    def test_alignment_accepts_string(self) -> None:
        column = Column("Size", alignment="right")
        assert column.alignment is Alignment.RIGHT

    def test_negative_min_width_is_ignored(self) -> None:
        assert Column("A", min_width=-3).min_width == 0

    def test_negative_max_width_is_ignored(self) -> None:
        assert Column("A", max_width=-1).max_width is None

    def test_is_immutable(self) -> None:
        column = Column("A")
        with pytest.raises(AttributeError):
            column.header = "B"  # type: ignore[misc]

    def test_invalid_alignment_raises(self) -> None:
        with pytest.raises(ValueError):
            Column("A", alignment="diagonal")


@pytest.mark.unit
class TestNormalizeCell:
    """Tests for cell value conversion."""

    def test_none_becomes_empty(self) -> None:
        assert normalize_cell(None) == ""

    def test_numbers_are_stringified(self) -> None:
        assert normalize_cell(42) == "42"

    def test_line_breaks_become_spaces(self) -> None:
        assert normalize_cell("a\nb\tc\r") == "a b c "

    def test_ansi_escapes_removed(self) -> None:
        assert normalize_cell("\x1b[31mred\x1b[0m") == "red"


@pytest.mark.unit
class TestTable:
    """Tests for the Table model."""

    def test_default_style_is_plain(self) -> None:
        assert Table([Column("A")]).style is TableStyle.PLAIN

    def test_style_accepts_string(self) -> None:
        assert Table([Column("A")], style="markdown").style is TableStyle.MARKDOWN

    def test_from_headers(self) -> None:
        table = Table.from_headers(["A", "B"], style=TableStyle.COMPACT)
        assert table.headers == ["A", "B"]
        assert table.style is TableStyle.COMPACT

    def test_add_row_stringifies_cells(self) -> None:
        table = Table([Column("A"), Column("B")])
        table.add_row(1, None)
        assert table.rows == [["1", ""]]

    def test_add_rows_preserves_order(self) -> None:
        table = Table([Column("A")])
        table.add_rows([["x"], ["y"], ["z"]])
        assert [row[0] for row in table.rows] == ["x", "y", "z"]
        assert len(table) == 3

    def test_cells_pads_missing(self) -> None:
        table = Table([Column("A"), Column("B"), Column("C")])
        assert table.cells(["1"]) == ["1", "", ""]

    def test_cells_drops_extra(self) -> None:
        table = Table([Column("A")])
        assert table.cells(["1", "2", "3"]) == ["1"]

    def test_cells_does_not_modify_row(self) -> None:
        table = Table([Column("A"), Column("B")])
        table.add_row("1")
        table.cells(table.rows[0])
        assert table.rows[0] == ["1"]

    def test_to_json_rows(self) -> None:
        table = Table([Column("name"), Column("value")])
        table.add_row("test", "123")
        rows = table.to_json_rows()
        assert rows == [{"name": "test", "value": "123"}]

    def test_to_json_rows_applies_row_policy(self) -> None:
        table = Table([Column("a"), Column("b")])
        table.add_row("1")
        table.add_row("1", "2", "3")
        assert table.to_json_rows() == [{"a": "1", "b": ""}, {"a": "1", "b": "2"}]

    def test_render_without_config_uses_defaults(self) -> None:
        table = Table([Column("A")])
        table.add_row("x")
        assert table.render() == "A\n-\nx\n"
