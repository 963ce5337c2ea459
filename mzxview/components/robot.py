"""Robot and sensor components.

Cells holding a robot or sensor reference it through their parameter byte,
a 1-based index into the board's robot or sensor collection.
:class:`SlotIndex` turns that byte into a checked zero-based index.
"""

from dataclasses import dataclass, replace
from typing import Sized

from pyrsistent import pvector
from pyrsistent.typing import PVector

from mzxview.commands import Command
from mzxview.components.position import Position
from mzxview.types import Glyph


@dataclass(frozen=True)
class Robot:
    """Scripted board entity.

    Attributes:
        ch: Display glyph.
        position: Cell the robot occupies.
        program: Ordered command list.
        name: Robot name, informational only.
    """

    ch: Glyph
    position: Position
    program: PVector[Command] = pvector()
    name: str = ""

    def with_char(self, ch: Glyph) -> "Robot":
        return replace(self, ch=ch)


@dataclass(frozen=True)
class Sensor:
    ch: Glyph
    name: str = ""


@dataclass(frozen=True)
class SlotIndex:
    """Zero-based index validated against a robot or sensor collection."""

    value: int

    @classmethod
    def from_param(cls, param: int, slots: Sized, kind: str = "slot") -> "SlotIndex":
        """Convert a 1-based cell parameter into an index into ``slots``.

        Raises:
            IndexError: If ``param`` does not name an existing entry. The world
                loader guarantees placed robots and sensors exist, so this is a
                broken world rather than a recoverable condition.
        """
        if not 1 <= param <= len(slots):
            raise IndexError(f"{kind} {param} does not exist (have {len(slots)})")
        return cls(param - 1)
