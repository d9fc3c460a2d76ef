"""TagRecord: the Scanner's output, consumed by the hierarchy transform."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TagRecord:
    """A named span found in a document.

    ``line`` and ``column`` are 1-based; columns count code points.
    """

    name: str
    value: str
    line: int
    column: int
