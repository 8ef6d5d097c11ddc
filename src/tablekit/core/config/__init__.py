"""Output settings with Pydantic validation."""

from tablekit.core.config.models import ENV_PREFIX, OutputSettings

__all__ = ["ENV_PREFIX", "OutputSettings"]
