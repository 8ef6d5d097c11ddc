"""tablekit custom exceptions."""

from __future__ import annotations


class TablekitError(Exception):
    """Base exception for errors reported to the user.

    Attributes:
        message: Human-readable error message.
        hint: Optional suggestion for fixing the problem.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize TablekitError.

        Args:
            message: Human-readable error message.
            hint: Optional suggestion for fixing the problem.
        """
        super().__init__(message)
        self.message = message
        self.hint = hint


class InputError(TablekitError):
    """Exception raised when tabular input cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        hint: str | None = None,
    ) -> None:
        """Initialize InputError.

        Args:
            message: Human-readable error message.
            source: Where the input came from (file path or "<stdin>").
            hint: Optional suggestion for fixing the problem.
        """
        super().__init__(message, hint=hint)
        self.source = source

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class ConfigurationError(TablekitError):
    """Exception raised for invalid option values or settings."""
