"""Tests for cli/output/formatters.py."""

from __future__ import annotations

import io
import json

import pytest
import yaml
from rich.console import Console

from tablekit.cli.output import (
    JsonFormatter,
    OutputConfig,
    OutputFormat,
    OutputFormatter,
    RenderConfig,
    Table,
    TableStyle,
    TextFormatter,
    YamlFormatter,
    get_formatter,
)


def _console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


def _formatter(config: OutputConfig) -> tuple[OutputFormatter, Console, Console]:
    console, err_console = _console(), _console()
    return get_formatter(config, console, err_console), console, err_console


@pytest.mark.unit
class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_detect_defaults_when_not_a_terminal(self) -> None:
        config = OutputConfig.detect(stream=io.StringIO())
        assert config.format is OutputFormat.TEXT
        assert config.color is False
        assert config.width == 80
        assert config.quiet is False

    def test_detect_explicit_values(self) -> None:
        config = OutputConfig.detect(
            format="json", color="always", width=50, quiet=True, stream=io.StringIO()
        )
        assert config == OutputConfig(format=OutputFormat.JSON, color=True, width=50, quiet=True)

    def test_detect_reads_columns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COLUMNS", "132")
        assert OutputConfig.detect(stream=io.StringIO()).width == 132

    def test_detect_invalid_format(self) -> None:
        with pytest.raises(ValueError):
            OutputConfig.detect(format="xml", stream=io.StringIO())

    def test_render_config(self) -> None:
        config = OutputConfig(width=60, color=True)
        assert config.render_config == RenderConfig(max_width=60, color_enabled=True)


@pytest.mark.unit
class TestGetFormatter:
    """Tests for the formatter factory."""

    @pytest.mark.parametrize(
        ("output_format", "expected"),
        [
            (OutputFormat.TEXT, TextFormatter),
            (OutputFormat.JSON, JsonFormatter),
            (OutputFormat.YAML, YamlFormatter),
        ],
    )
    def test_returns_matching_class(self, output_format: OutputFormat, expected: type) -> None:
        formatter = get_formatter(OutputConfig(format=output_format), _console(), _console())
        assert isinstance(formatter, expected)


@pytest.mark.unit
class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_format_table_writes_rendered_text(self, sample_table: Table) -> None:
        config = OutputConfig(width=80)
        formatter, console, _ = _formatter(config)
        formatter.format_table(sample_table)
        assert _output(console) == sample_table.render(config.render_config)

    def test_format_table_keeps_markdown_style(self, sample_table: Table) -> None:
        sample_table.style = TableStyle.MARKDOWN
        formatter, console, _ = _formatter(OutputConfig())
        formatter.format_table(sample_table)
        assert _output(console).splitlines()[1] == "| :--- | :---- |"

    def test_format_table_passes_color(self, sample_table: Table) -> None:
        formatter, console, _ = _formatter(OutputConfig(color=True))
        formatter.format_table(sample_table)
        assert _output(console).startswith("\x1b[1mName")

    def test_format_list_empty_prints_message(self) -> None:
        formatter, console, _ = _formatter(OutputConfig())
        formatter.format_list([], "No records found.")
        assert _output(console) == "No records found.\n"

    def test_format_list(self) -> None:
        formatter, console, _ = _formatter(OutputConfig())
        formatter.format_list(["a", "b"])
        assert _output(console) == "a\nb\n"

    def test_format_dict(self) -> None:
        formatter, console, _ = _formatter(OutputConfig(width=30))
        formatter.format_dict({"name": "x", "enabled": True, "missing": None}, title="Info")
        assert _output(console).splitlines() == [
            "Info",
            "====",
            "name".ljust(10) + " x",
            "enabled".ljust(10) + " true",
            "missing".ljust(10) + " -",
        ]

    def test_quiet_suppresses_messages(self) -> None:
        formatter, console, err_console = _formatter(OutputConfig(quiet=True))
        formatter.message("hello")
        formatter.success("done")
        formatter.hint("try this")
        formatter.warning("careful")
        assert _output(console) == ""
        assert "Warning: careful" in _output(err_console)

    def test_messages_escape_markup(self) -> None:
        formatter, console, _ = _formatter(OutputConfig())
        formatter.message("[bold]literal[/bold]")
        assert _output(console) == "[bold]literal[/bold]\n"

    def test_error_goes_to_err_console(self) -> None:
        formatter, console, err_console = _formatter(OutputConfig())
        formatter.error("boom")
        assert _output(console) == ""
        assert "Error: boom" in _output(err_console)

    def test_success_and_hint(self) -> None:
        formatter, console, _ = _formatter(OutputConfig())
        formatter.success("done")
        formatter.hint("try this")
        output = _output(console)
        assert "done" in output
        assert "Hint: try this" in output


@pytest.mark.unit
class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_format_table(self, sample_table: Table) -> None:
        formatter, console, _ = _formatter(OutputConfig(format=OutputFormat.JSON))
        formatter.format_table(sample_table)
        assert json.loads(_output(console)) == [
            {"Name": "foo", "Value": "123"},
            {"Name": "bar", "Value": "456"},
        ]

    def test_format_table_ignores_color(self, sample_table: Table) -> None:
        formatter, console, _ = _formatter(OutputConfig(format=OutputFormat.JSON, color=True))
        formatter.format_table(sample_table)
        assert "\x1b[" not in _output(console)

    def test_empty_list(self) -> None:
        formatter, console, _ = _formatter(OutputConfig(format=OutputFormat.JSON))
        formatter.format_list([], "No records found.")
        assert _output(console) == "[]\n"

    def test_format_dict_keeps_unicode(self) -> None:
        formatter, console, _ = _formatter(OutputConfig(format=OutputFormat.JSON))
        formatter.format_dict({"name": "日本"})
        assert "日本" in _output(console)


@pytest.mark.unit
class TestYamlFormatter:
    """Tests for YamlFormatter."""

    def test_format_table(self, sample_table: Table) -> None:
        formatter, console, _ = _formatter(OutputConfig(format=OutputFormat.YAML))
        formatter.format_table(sample_table)
        assert yaml.safe_load(_output(console)) == [
            {"Name": "foo", "Value": "123"},
            {"Name": "bar", "Value": "456"},
        ]

    def test_keeps_key_order(self) -> None:
        formatter, console, _ = _formatter(OutputConfig(format=OutputFormat.YAML))
        formatter.format_dict({"zeta": 1, "alpha": 2})
        assert _output(console) == "zeta: 1\nalpha: 2\n"
