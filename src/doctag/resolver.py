"""Resolve a path segment to an intermediate node, creating it if needed."""

from __future__ import annotations

from .identifier import ARRAY_MARKER
from .values import TreeValue, VArray, VObject, VScalar


def resolve(node: TreeValue, key: str) -> VObject | VArray:
    """Return the container that *key* names below *node*.

    - VObject, ``#key``: append a fresh object to the array bound to *key*
      and return it.  A missing binding becomes ``[obj]``; any other binding
      is promoted to ``[old, obj]``.
    - VObject, ``key``: return the bound object or array, replacing a missing
      or scalar binding with a fresh object.  A returned array is addressed
      through its last element by the next segment.
    - VArray: descend into the last element (synthesizing one when empty).
    """
    if isinstance(node, VObject):
        return _resolve_in_object(node, key)
    if isinstance(node, VArray):
        return _resolve_in_array(node, key)
    raise TypeError(f"cannot resolve {key!r} on {type(node).__name__}")


def _resolve_in_object(node: VObject, key: str) -> VObject | VArray:
    if key.startswith(ARRAY_MARKER):
        key = key[1:]
        child = VObject()
        current = node.entries.get(key)
        if current is None:
            node.entries[key] = VArray([child])
        elif isinstance(current, VArray):
            current.items.append(child)
        else:
            node.entries[key] = VArray([current, child])
        return child

    current = node.entries.get(key)
    if current is None or isinstance(current, VScalar):
        current = VObject()
        node.entries[key] = current
    return current


def _resolve_in_array(node: VArray, key: str) -> VObject | VArray:
    if not node.items:
        child = VObject()
        if key.startswith(ARRAY_MARKER):
            node.items.append(VObject({key[1:]: VArray([child])}))
        else:
            node.items.append(VObject({key: child}))
        return child

    last = node.items[-1]
    if isinstance(last, VScalar):
        # A scalar cannot hold children.
        last = VObject()
        node.items[-1] = last
    return resolve(last, key)
