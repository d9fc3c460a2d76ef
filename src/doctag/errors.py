"""Exception hierarchy for doctag."""

from __future__ import annotations


class DoctagError(Exception):
    """Base class for all doctag failures.

    ``line`` and ``column`` locate the failure in the scanned document when
    they are known.
    """

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"Line: {self.line}, Column: {self.column} :: {self.message}"


class ScanConfigError(DoctagError):
    """Invalid tag prefix / suffix configuration."""


class ScanIOError(DoctagError):
    """The input stream failed while scanning."""


class TransformError(DoctagError):
    """A tag name could not be placed in the hierarchy."""


class AmbiguousArrayMarkerError(TransformError):
    """A path segment is the bare ``#`` marker with no key name."""


class EmptyPathAfterSanitizeError(TransformError):
    """A path segment is empty once reduced to an identifier."""


class ConfigError(DoctagError):
    """Invalid settings or settings file."""
