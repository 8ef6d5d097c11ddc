"""Status icons with ASCII fallbacks."""

from __future__ import annotations

from collections.abc import Mapping

from tablekit.cli.output.terminal import detect_unicode_support


class Icons:
    """Icon constants."""

    CHECK = "✓"
    CROSS = "✗"
    WARNING = "⚠"
    INFO = "ℹ"
    ARROW = "→"

    CHECK_ASCII = "[ok]"
    CROSS_ASCII = "[err]"
    WARNING_ASCII = "[warn]"
    INFO_ASCII = "[info]"
    ARROW_ASCII = "->"


class IconContext:
    """Picks Unicode or ASCII icons.

    Args:
        unicode: Force one set. When None, the environment is checked.
        environ: Environment to check instead of ``os.environ``.
    """

    def __init__(
        self,
        unicode: bool | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.unicode = detect_unicode_support(environ) if unicode is None else unicode

    def _pick(self, fancy: str, plain: str) -> str:
        return fancy if self.unicode else plain

    def check(self) -> str:
        return self._pick(Icons.CHECK, Icons.CHECK_ASCII)

    def cross(self) -> str:
        return self._pick(Icons.CROSS, Icons.CROSS_ASCII)

    def warning(self) -> str:
        return self._pick(Icons.WARNING, Icons.WARNING_ASCII)

    def info(self) -> str:
        return self._pick(Icons.INFO, Icons.INFO_ASCII)

    def arrow(self) -> str:
        return self._pick(Icons.ARROW, Icons.ARROW_ASCII)
