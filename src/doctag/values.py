"""Tree value types produced by the hierarchy transform."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass
class VScalar:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class VObject:
    entries: dict[str, "TreeValue"] = field(default_factory=dict)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.entries.items()) + "}"


@dataclass
class VArray:
    items: list["TreeValue"] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


TreeValue = Union[VScalar, VObject, VArray]
