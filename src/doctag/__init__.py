"""doctag: extract named text spans from documents and nest them into JSON trees."""

from .config import DoctagSettings, load_settings
from .diagnostics import CollectingSink, Diagnostic, LoggingSink
from .document import Document, extract, extract_file
from .errors import (
    AmbiguousArrayMarkerError,
    ConfigError,
    DoctagError,
    EmptyPathAfterSanitizeError,
    ScanConfigError,
    ScanIOError,
    TransformError,
)
from .formatter import dumps, from_plain, to_plain
from .hierarchy import DEFAULT_SEPARATOR, split_path, transform
from .identifier import to_identifier
from .record import TagRecord
from .scanner import DEFAULT_TAG_PREFIX, DEFAULT_TAG_SUFFIX, Scanner, scan, scan_bytes, scan_file
from .values import TreeValue, VArray, VObject, VScalar

__all__ = [
    "extract",
    "extract_file",
    "Document",
    "DoctagSettings",
    "load_settings",
    "Scanner",
    "scan",
    "scan_bytes",
    "scan_file",
    "TagRecord",
    "transform",
    "split_path",
    "to_identifier",
    "TreeValue",
    "VScalar",
    "VObject",
    "VArray",
    "to_plain",
    "from_plain",
    "dumps",
    "Diagnostic",
    "CollectingSink",
    "LoggingSink",
    "DoctagError",
    "ScanConfigError",
    "ScanIOError",
    "TransformError",
    "AmbiguousArrayMarkerError",
    "EmptyPathAfterSanitizeError",
    "ConfigError",
    "DEFAULT_TAG_PREFIX",
    "DEFAULT_TAG_SUFFIX",
    "DEFAULT_SEPARATOR",
]
