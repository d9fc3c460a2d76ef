"""Diagnostic events emitted by the Scanner and the sinks that receive them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal markup problem found while scanning."""

    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"Line: {self.line}, Column: {self.column}\n{self.message}"


DiagnosticSink = Callable[[Diagnostic], None]


class CollectingSink:
    """Keeps every diagnostic it receives, in order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]


class LoggingSink:
    """Forwards diagnostics to a :mod:`logging` logger at WARNING level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("doctag")

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.logger.warning(
            "doctag warning: Line: %d, Column: %d :: %s",
            diagnostic.line,
            diagnostic.column,
            diagnostic.message,
        )


def fan_out(*sinks: DiagnosticSink | None) -> DiagnosticSink:
    """Combine several sinks into one; ``None`` entries are ignored."""
    active = [s for s in sinks if s is not None]

    def _emit(diagnostic: Diagnostic) -> None:
        for sink in active:
            sink(diagnostic)

    return _emit
