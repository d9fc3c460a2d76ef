"""Scanner: single-pass lexer that pulls doctags out of a UTF-8 byte stream.

A doctag is a name wrapped in a configurable prefix and suffix.  Its value is
every byte between the end of the tag and the start of the next tag (or the
end of input), whitespace included::

    <{ page/title }>
    Today's News Stories

A name starting with ``!`` is skipped, which also gives an explicit way to end
a value early::

    <{ page/title }>Today's News Stories<{!}>

Malformed markup never aborts a scan.  Each problem is reported to the
optional diagnostic sink and scanning carries on.
"""

from __future__ import annotations

import io
import logging
from enum import Enum, auto
from pathlib import Path
from typing import BinaryIO, Iterator

from .diagnostics import Diagnostic, DiagnosticSink
from .errors import ScanConfigError, ScanIOError
from .identifier import WHITESPACE
from .record import TagRecord

logger = logging.getLogger(__name__)

DEFAULT_TAG_PREFIX = "<{"
DEFAULT_TAG_SUFFIX = "}>"
SKIP_MARKER = "!"

_NEWLINE = 0x0A
_READ_SIZE = 4096


class ScanState(Enum):
    NO_OPEN_TAG = auto()
    OPEN_EMPTY_NAME = auto()
    OPEN_WITH_NAME = auto()


# ---------------------------------------------------------------------------
# Byte source with bounded lookahead
# ---------------------------------------------------------------------------

class _ByteReader:
    """Reads a binary stream one byte at a time, with ``peek`` lookahead."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._buf = b""
        self._pos = 0
        self._eof = False

    def _fill(self, need: int) -> None:
        while not self._eof and len(self._buf) - self._pos < need:
            chunk = self._stream.read(_READ_SIZE)
            if not chunk:
                self._eof = True
                break
            self._buf = self._buf[self._pos:] + chunk
            self._pos = 0

    def read_byte(self) -> int | None:
        self._fill(1)
        if self._pos >= len(self._buf):
            return None
        b = self._buf[self._pos]
        self._pos += 1
        return b

    def peek(self, size: int) -> bytes:
        """Return up to *size* upcoming bytes without consuming them."""
        self._fill(size)
        return self._buf[self._pos:self._pos + size]

    def skip(self, size: int) -> None:
        self._pos += size


def _is_rune_start(b: int) -> bool:
    return b & 0xC0 != 0x80


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------

class Scanner:
    """Stateful doctag lexer for one prefix/suffix pair.

    Usage::

        scanner = Scanner("<{", "}>", sink=print)
        records = scanner.scan(open("page.txt", "rb"))
    """

    def __init__(
        self,
        prefix: str = DEFAULT_TAG_PREFIX,
        suffix: str = DEFAULT_TAG_SUFFIX,
        sink: DiagnosticSink | None = None,
    ) -> None:
        if prefix == suffix:
            raise ScanConfigError("Tag prefix and suffix cannot be the same.")
        if not prefix:
            raise ScanConfigError("Tag prefix cannot be the empty string.")
        if not suffix:
            raise ScanConfigError("Tag suffix cannot be the empty string.")

        self.prefix = prefix
        self.suffix = suffix
        self.sink = sink
        self._prefix = prefix.encode("utf-8")
        self._suffix = suffix.encode("utf-8")
        # Applied after either delimiter is consumed.
        self._column_offset = len(suffix) - 1

    def scan(self, stream: BinaryIO) -> list[TagRecord]:
        """Scan *stream* to the end and return its records in document order."""
        return list(self.records(stream))

    def records(self, stream: BinaryIO) -> Iterator[TagRecord]:
        """Yield records from *stream* as each one is completed."""
        reader = _ByteReader(stream)
        state = ScanState.NO_OPEN_TAG
        buff = bytearray()
        name = ""
        line, column = 1, 0
        tag_line, tag_column = 0, 0
        count = 0

        while True:
            try:
                b = reader.read_byte()
            except OSError as exc:
                raise ScanIOError(str(exc), line, column) from exc
            if b is None:
                break

            if _is_rune_start(b):
                column += 1
            if b == _NEWLINE:
                line += 1
                column = 0

            if b == self._prefix[0] and self._match(
                reader, self._prefix, line, column, consume=True
            ):
                if state is ScanState.OPEN_WITH_NAME:
                    count += 1
                    yield TagRecord(name, self._decode(buff), tag_line, tag_column)
                elif state is ScanState.OPEN_EMPTY_NAME:
                    self._warn(
                        line,
                        column,
                        "doctag open encountered but the previous doctag was "
                        "not closed properly or has no tag name.",
                    )
                state = ScanState.OPEN_EMPTY_NAME
                buff.clear()
                name = ""
                tag_line, tag_column = line, column
                column += self._column_offset
                continue

            if (
                b == self._suffix[0]
                and state is not ScanState.NO_OPEN_TAG
                and tag_line == line
            ):
                if state is ScanState.OPEN_EMPTY_NAME:
                    if self._match(reader, self._suffix, line, column, consume=True):
                        column += self._column_offset
                        name = self._decode(buff).strip(WHITESPACE)
                        buff.clear()
                        if not name:
                            self._warn(
                                line,
                                column,
                                "doctag close encountered but tag name not "
                                "detected. Skipping doctag.",
                            )
                            state = ScanState.NO_OPEN_TAG
                        elif name.startswith(SKIP_MARKER):
                            self._warn(line, column, f"skipping doctag '{name}'")
                            state = ScanState.NO_OPEN_TAG
                        else:
                            state = ScanState.OPEN_WITH_NAME
                        continue
                elif self._match(reader, self._suffix, line, column, consume=False):
                    self._warn(
                        line,
                        column,
                        "doctag close encountered but the previous doctag was "
                        "not closed properly or has no tag name.",
                    )

            if state is not ScanState.NO_OPEN_TAG:
                buff.append(b)

        if state is ScanState.OPEN_WITH_NAME:
            count += 1
            yield TagRecord(name, self._decode(buff), tag_line, tag_column)

        logger.debug("scanned %d line(s), %d doctag(s)", line, count)

    # -- Helpers -------------------------------------------------------

    @staticmethod
    def _match(
        reader: _ByteReader, token: bytes, line: int, column: int, consume: bool
    ) -> bool:
        """Check the bytes after an already-read first byte against *token*."""
        rest = token[1:]
        if not rest:
            return True
        try:
            ahead = reader.peek(len(rest))
        except OSError as exc:
            raise ScanIOError(str(exc), line, column) from exc
        if ahead != rest:
            return False
        if consume:
            reader.skip(len(rest))
        return True

    @staticmethod
    def _decode(buff: bytearray) -> str:
        return buff.decode("utf-8", errors="replace")

    def _warn(self, line: int, column: int, message: str) -> None:
        if self.sink is not None:
            self.sink(Diagnostic(line, column, message))


# ---------------------------------------------------------------------------
# Convenience entry points
# ---------------------------------------------------------------------------

def scan(
    stream: BinaryIO,
    prefix: str = DEFAULT_TAG_PREFIX,
    suffix: str = DEFAULT_TAG_SUFFIX,
    sink: DiagnosticSink | None = None,
) -> list[TagRecord]:
    """Scan a binary stream for doctags."""
    return Scanner(prefix, suffix, sink).scan(stream)


def scan_bytes(
    data: bytes | str,
    prefix: str = DEFAULT_TAG_PREFIX,
    suffix: str = DEFAULT_TAG_SUFFIX,
    sink: DiagnosticSink | None = None,
) -> list[TagRecord]:
    """Scan an in-memory document; ``str`` input is encoded as UTF-8."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return scan(io.BytesIO(data), prefix, suffix, sink)


def scan_file(
    path: str | Path,
    prefix: str = DEFAULT_TAG_PREFIX,
    suffix: str = DEFAULT_TAG_SUFFIX,
    sink: DiagnosticSink | None = None,
) -> list[TagRecord]:
    """Scan the file at *path*."""
    scanner = Scanner(prefix, suffix, sink)
    with open(path, "rb") as fh:
        return scanner.scan(fh)
