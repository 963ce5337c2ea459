"""Robot command set.

Only the commands that can change what a board looks like before it is
rendered are modelled explicitly. Everything else a robot program may contain
is kept as :class:`Other` so program order and length are preserved.

Command arguments are *expressions*: either an integer literal or a string
naming a counter (or holding a numeric literal). They are resolved through
:class:`mzxview.counters.Resolve` at execution time.
"""

from dataclasses import dataclass
from typing import Tuple, Union

Expr = Union[int, str]


@dataclass(frozen=True)
class End:
    """Stop the program."""


@dataclass(frozen=True)
class Wait:
    """Yield for ``ticks`` cycles; ends the pre-render pass."""

    ticks: Expr = 1


@dataclass(frozen=True)
class LoadCharSet:
    """Replace the charset with a file relative to the world directory."""

    path: str


@dataclass(frozen=True)
class LoadPalette:
    """Overwrite palette entries from a file relative to the world directory."""

    path: str


@dataclass(frozen=True)
class SetColor:
    """Set palette entry ``color`` to ``(r, g, b)``."""

    color: Expr
    r: Expr
    g: Expr
    b: Expr


@dataclass(frozen=True)
class Char:
    """Set the executing robot's glyph."""

    ch: Expr


@dataclass(frozen=True)
class Color:
    """Set the color code of the executing robot's cell."""

    color: Expr


@dataclass(frozen=True)
class PlayerColor:
    """Set the color code of the player's cell."""

    color: Expr


@dataclass(frozen=True)
class Other:
    """Any command without an effect on rendering."""

    name: str
    args: Tuple[Expr, ...] = ()


Command = Union[
    End, Wait, LoadCharSet, LoadPalette, SetColor, Char, Color, PlayerColor, Other
]

TERMINATING_COMMANDS = (End, Wait)
