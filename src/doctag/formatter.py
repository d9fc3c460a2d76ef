"""Conversions from tree values to plain Python data and text."""

from __future__ import annotations

import json
from typing import Any

from .values import TreeValue, VArray, VObject, VScalar


def to_plain(value: TreeValue) -> Any:
    """Convert a tree value to ``str`` / ``dict`` / ``list``."""
    if isinstance(value, VScalar):
        return value.value
    if isinstance(value, VObject):
        return {k: to_plain(v) for k, v in value.entries.items()}
    if isinstance(value, VArray):
        return [to_plain(v) for v in value.items]
    raise TypeError(f"not a tree value: {value!r}")


def from_plain(obj: Any) -> TreeValue:
    """Build a tree value from ``str`` / ``dict`` / ``list`` data."""
    if isinstance(obj, str):
        return VScalar(obj)
    if isinstance(obj, dict):
        return VObject({str(k): from_plain(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return VArray([from_plain(v) for v in obj])
    raise TypeError(f"cannot convert {type(obj).__name__} to a tree value")


def dumps(value: TreeValue, pretty: bool = False) -> str:
    """Serialize *value* as JSON text.

    Compact output ends with a newline; pretty output is indented by two
    spaces and does not.
    """
    plain = to_plain(value)
    if pretty:
        return json.dumps(plain, ensure_ascii=False, indent=2)
    return json.dumps(plain, ensure_ascii=False) + "\n"


def _fmt_inline(value: TreeValue) -> str:
    if isinstance(value, VScalar):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, VObject) and not value.entries:
        return "{}"
    if isinstance(value, VArray) and not value.items:
        return "[]"
    return ""


def format_inspect(value: TreeValue, indent: int = 0) -> str:
    """Pretty-print a tree as an indented outline."""
    pad = "  " * indent
    inline = _fmt_inline(value)
    if inline:
        return pad + inline

    lines: list[str] = []
    if isinstance(value, VObject):
        width = max(len(k) for k in value.entries)
        for k, v in value.entries.items():
            child = _fmt_inline(v)
            if child:
                lines.append(f"{pad}{k:<{width}} : {child}")
            else:
                lines.append(f"{pad}{k}:")
                lines.append(format_inspect(v, indent + 1))
    else:
        for i, v in enumerate(value.items, 1):
            child = _fmt_inline(v)
            if child:
                lines.append(f"{pad}{i}: {child}")
            else:
                lines.append(f"{pad}{i}:")
                lines.append(format_inspect(v, indent + 1))
    return "\n".join(lines)
