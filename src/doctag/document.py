"""Document: the result of extracting doctags from one source."""

from __future__ import annotations

import dataclasses
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Union

from .config import DoctagSettings
from .diagnostics import CollectingSink, Diagnostic, DiagnosticSink, fan_out
from .formatter import dumps, to_plain
from .hierarchy import transform
from .identifier import WHITESPACE, to_identifier
from .record import TagRecord
from .scanner import Scanner
from .values import VObject

logger = logging.getLogger(__name__)

Source = Union[bytes, str, BinaryIO]


@dataclass
class Document:
    """Holds the records scanned from a source and the tree built from them."""

    records: list[TagRecord] = field(default_factory=list)
    tree: VObject = field(default_factory=VObject)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_plain(self) -> dict[str, Any]:
        return to_plain(self.tree)

    def to_json(self, pretty: bool = False) -> str:
        return dumps(self.tree, pretty=pretty)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def extract(
    source: Source,
    settings: DoctagSettings | None = None,
    sink: DiagnosticSink | None = None,
) -> Document:
    """Scan *source* and assemble its doctags into a Document.

    *sink* receives each scan warning as it happens; all warnings are also
    kept on ``Document.diagnostics``.
    """
    settings = settings or DoctagSettings()
    collected = CollectingSink()
    scanner = Scanner(
        settings.tag_prefix, settings.tag_suffix, sink=fan_out(collected, sink)
    )

    if isinstance(source, str):
        source = source.encode("utf-8")
    if isinstance(source, bytes):
        source = io.BytesIO(source)

    records = scanner.scan(source)
    logger.debug("extracted %d record(s)", len(records))

    prepared = [_prepare(r, settings) for r in records]
    tree = transform(
        prepared,
        sanitize_keys=settings.sanitize_keys,
        separator=settings.separator,
    )
    return Document(records=records, tree=tree, diagnostics=collected.diagnostics)


def extract_file(
    path: str | Path,
    settings: DoctagSettings | None = None,
    sink: DiagnosticSink | None = None,
) -> Document:
    """Like :func:`extract` for the file at *path*."""
    with open(path, "rb") as fh:
        return extract(fh, settings, sink)


def _prepare(record: TagRecord, settings: DoctagSettings) -> TagRecord:
    """Apply value trimming and flat-mode key flattening to a copy of *record*."""
    changes: dict[str, str] = {}
    if settings.trim:
        changes["value"] = record.value.strip(WHITESPACE)
    if not settings.hierarchical:
        # Separators become underscores, then the name is reduced to a
        # single identifier key.
        changes["name"] = to_identifier(record.name.replace(settings.separator, "_"))
    if not changes:
        return record
    return dataclasses.replace(record, **changes)
