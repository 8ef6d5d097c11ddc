"""Output settings models."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from tablekit.cli.output.formatters import OutputFormat
from tablekit.cli.output.table import TableStyle
from tablekit.cli.output.terminal import ColorChoice

ENV_PREFIX = "TABLEKIT_"


class OutputSettings(BaseModel):
    """Default output settings for CLI commands.

    Command-line options take precedence over these values.
    """

    model_config = ConfigDict(extra="forbid")

    style: TableStyle = TableStyle.PLAIN
    output_format: OutputFormat = OutputFormat.TEXT
    color: ColorChoice = ColorChoice.AUTO
    width: int | None = None
    quiet: bool = False

    @field_validator("style", "output_format", "color", mode="before")
    @classmethod
    def normalize_choice(cls, v: Any) -> Any:
        """Accept choices in any case and with surrounding whitespace."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("width")
    @classmethod
    def validate_width(cls, v: int | None) -> int | None:
        """Validate width is positive."""
        if v is not None and v <= 0:
            raise ValueError("width must be positive")
        return v

    @classmethod
    def from_env(
        cls,
        base_config: dict[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> OutputSettings:
        """Create settings with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            TABLEKIT_STYLE: Table style (plain, bordered, markdown, compact)
            TABLEKIT_OUTPUT: Output format (text, json, yaml)
            TABLEKIT_COLOR: Color choice (auto, always, never)
            TABLEKIT_WIDTH: Table width in columns
            TABLEKIT_QUIET: Suppress informational messages (1/true/yes)

        Raises:
            pydantic.ValidationError: If a value is not valid.
        """
        env = os.environ if environ is None else environ
        config_dict = base_config.copy() if base_config else {}

        if style := env.get(f"{ENV_PREFIX}STYLE"):
            config_dict["style"] = style

        if output_format := env.get(f"{ENV_PREFIX}OUTPUT"):
            config_dict["output_format"] = output_format

        if color := env.get(f"{ENV_PREFIX}COLOR"):
            config_dict["color"] = color

        if width := env.get(f"{ENV_PREFIX}WIDTH"):
            config_dict["width"] = width

        if quiet := env.get(f"{ENV_PREFIX}QUIET"):
            config_dict["quiet"] = quiet.strip().lower() in ("1", "true", "yes", "on")

        return cls.model_validate(config_dict)
