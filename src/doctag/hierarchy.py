"""Hierarchy transform: doctag records → nested tree of objects and arrays.

Tag names describe a path, split on whitespace and the separator character::

    <{ page/title }>This is the page title<{!}>
    <{ page/#keywords }>awesome<{!}>
    <{ page/#keywords }>stuff<{!}>
    <{ page/#links/rel }>next<{!}>
    <{ page/links/href }>http://my.domain.com/next.html<{!}>

becomes::

    {"page": {"title": "This is the page title",
              "keywords": ["awesome", "stuff"],
              "links": [{"rel": "next", "href": "http://my.domain.com/next.html"}]}}

A ``#`` prefix makes the segment an array.  Later paths that name the same key
without ``#`` address the array's most recently added element.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from .errors import AmbiguousArrayMarkerError, ConfigError, EmptyPathAfterSanitizeError
from .identifier import ARRAY_MARKER, WHITESPACE, to_path_identifier
from .record import TagRecord
from .resolver import resolve
from .setter import assign
from .values import TreeValue, VObject, VScalar

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "/"


def _path_pattern(separator: str) -> re.Pattern[str]:
    if len(separator) != 1:
        raise ConfigError(f"separator must be a single character, got {separator!r}")
    return re.compile(f"[{re.escape(WHITESPACE + separator)}]+")


def split_path(name: str, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """Split a tag name into its non-empty path segments."""
    return [seg for seg in _path_pattern(separator).split(name) if seg]


def path_segments(
    record: TagRecord, separator: str = DEFAULT_SEPARATOR, sanitize_keys: bool = True
) -> list[str]:
    """Return the validated path segments for *record*.

    Raises AmbiguousArrayMarkerError for a bare ``#`` segment and
    EmptyPathAfterSanitizeError when a segment (or the whole path) is empty.
    """
    segments = split_path(record.name, separator)

    if ARRAY_MARKER in segments:
        raise AmbiguousArrayMarkerError(
            f"Path cannot equal '{ARRAY_MARKER}'", record.line, record.column
        )
    if not segments:
        raise EmptyPathAfterSanitizeError(
            f"Tag name {record.name!r} has no path segments", record.line, record.column
        )

    if sanitize_keys:
        segments = [to_path_identifier(seg) for seg in segments]
        if any(not seg for seg in segments):
            raise EmptyPathAfterSanitizeError(
                "After converting to an identifier, path is empty",
                record.line,
                record.column,
            )
    return segments


def transform(
    records: Iterable[TagRecord],
    sanitize_keys: bool = True,
    separator: str = DEFAULT_SEPARATOR,
) -> VObject:
    """Assemble *records*, in order, into a fresh root object."""
    root = VObject()
    for record in records:
        apply_record(root, record, sanitize_keys, separator)
    logger.debug("assembled tree with %d top-level key(s)", len(root.entries))
    return root


def apply_record(
    root: VObject,
    record: TagRecord,
    sanitize_keys: bool = True,
    separator: str = DEFAULT_SEPARATOR,
) -> None:
    """Place one record's value into the tree rooted at *root*."""
    *parents, leaf = path_segments(record, separator, sanitize_keys)
    node: TreeValue = root
    for segment in parents:
        node = resolve(node, segment)
    assign(node, leaf, VScalar(record.value))
