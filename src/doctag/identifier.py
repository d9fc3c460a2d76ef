"""Identifier filter: reduces arbitrary text to an identifier-safe string."""

from __future__ import annotations

from typing import Callable

ValidCharFunc = Callable[[str, int], bool]

ARRAY_MARKER = "#"

# Unicode White_Space characters. Unlike str.isspace this excludes the
# information separators U+001C..U+001F.
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _is_letter(ch: str) -> bool:
    return ch.isalpha()


def _is_digit(ch: str) -> bool:
    return ch.isdecimal()


def to_identifier_func(text: str, is_valid: ValidCharFunc) -> str:
    """Keep each character of *text* for which ``is_valid(ch, length)`` holds.

    ``length`` is the length of the identifier built so far, so the callback
    can apply different rules to the leading character.
    """
    chars: list[str] = []
    for ch in text:
        if is_valid(ch, len(chars)):
            chars.append(ch)
    return "".join(chars)


def _identifier_char(ch: str, length: int) -> bool:
    if length == 0:
        return ch == "_" or _is_letter(ch)
    return ch == "_" or _is_letter(ch) or _is_digit(ch)


def _path_identifier_char(ch: str, length: int) -> bool:
    if length == 0 and ch == ARRAY_MARKER:
        return True
    return _identifier_char(ch, length)


def to_identifier(text: str) -> str:
    """Drop every character that cannot appear in an identifier.

    >>> to_identifier("45_aceIn45")
    '_aceIn45'

    May return an empty string.
    """
    return to_identifier_func(text, _identifier_char)


def to_path_identifier(segment: str) -> str:
    """Like :func:`to_identifier` but keeps a leading ``#`` array marker."""
    return to_identifier_func(segment, _path_identifier_char)
