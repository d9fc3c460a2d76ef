"""Store a scalar leaf value under the last segment of a path."""

from __future__ import annotations

from .identifier import ARRAY_MARKER
from .values import TreeValue, VArray, VObject, VScalar


def assign(node: TreeValue, key: str, value: VScalar) -> None:
    """Set *key* on *node* to *value*.

    ``#key`` appends to (or promotes into) an array; a plain key overwrites a
    missing or scalar binding and leaves existing structure untouched.  On an
    array the last element receives the value.
    """
    if isinstance(node, VObject):
        _assign_in_object(node, key, value)
    elif isinstance(node, VArray):
        _assign_in_array(node, key, value)
    else:
        raise TypeError(f"cannot assign {key!r} on {type(node).__name__}")


def _assign_in_object(node: VObject, key: str, value: VScalar) -> None:
    if key.startswith(ARRAY_MARKER):
        key = key[1:]
        current = node.entries.get(key)
        if current is None:
            node.entries[key] = VArray([value])
        elif isinstance(current, VArray):
            current.items.append(value)
        else:
            node.entries[key] = VArray([current, value])
        return

    current = node.entries.get(key)
    if current is None or isinstance(current, VScalar):
        node.entries[key] = value


def _assign_in_array(node: VArray, key: str, value: VScalar) -> None:
    if not node.items:
        node.items.append(_synthesize(key, value))
        return

    last = node.items[-1]
    if isinstance(last, VScalar):
        node.items[-1] = _synthesize(key, value)
        return
    assign(last, key, value)


def _synthesize(key: str, value: VScalar) -> VObject:
    if key.startswith(ARRAY_MARKER):
        return VObject({key[1:]: VArray([value])})
    return VObject({key: value})
