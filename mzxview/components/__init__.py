"""World data components.

Re-exports the immutable building blocks a world is made of: the
:class:`Charset` and :class:`Palette` shared by every board, the
:class:`Board` layers, and the :class:`Robot` / :class:`Sensor` entities that
board cells refer to.
"""

from .charset import Charset
from .palette import Color, Palette
from .position import Position
from .robot import Robot, Sensor, SlotIndex
from .board import Board, Cell, OverlayCell, OverlayMode

__all__ = [
    "Board",
    "Cell",
    "Charset",
    "Color",
    "OverlayCell",
    "OverlayMode",
    "Palette",
    "Position",
    "Robot",
    "Sensor",
    "SlotIndex",
]
