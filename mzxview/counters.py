"""Counter storage and expression resolution.

The interpreter never parses expressions itself; it asks a :class:`Resolve`
implementation for an integer. :class:`Counters` is the default one: integer
literals resolve to themselves, decimal strings are parsed, and any other
string is looked up as a counter name (case-insensitive, missing names are 0).
"""

import re
from dataclasses import dataclass, field
from typing import Mapping, Protocol

from pyrsistent import pmap
from pyrsistent.typing import PMap

from mzxview.commands import Expr

_DECIMAL = re.compile(r"[+-]?[0-9]+")


class Resolve(Protocol):
    def resolve(self, expr: Expr) -> int: ...


def _normalize(name: str) -> str:
    return name.strip().lower()


@dataclass(frozen=True)
class Counters:
    """Named integer counters.

    Attributes:
        values: Counter values keyed by lower-cased name.
    """

    values: PMap[str, int] = field(default_factory=pmap)

    @classmethod
    def from_mapping(cls, values: Mapping[str, int]) -> "Counters":
        return cls(pmap({_normalize(k): int(v) for k, v in values.items()}))

    def get(self, name: str) -> int:
        return self.values.get(_normalize(name), 0)

    def resolve(self, expr: Expr) -> int:
        if isinstance(expr, bool):
            raise TypeError(f"Cannot resolve boolean expression {expr!r}")
        if isinstance(expr, int):
            return expr
        text = expr.strip()
        if _DECIMAL.fullmatch(text):
            return int(text)
        return self.get(text)
