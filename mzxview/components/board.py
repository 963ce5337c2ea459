"""Board component.

A board is a ``width`` x ``height`` grid stored as parallel flat layers
addressed by ``y * width + x``:

* ``level`` holds the visible cells.
* ``under`` holds what lies beneath them; its color fills in the background
  of level cells whose own background component is zero.
* ``overlay`` optionally holds ``(char, color)`` annotations drawn on top. It
  is only honored in the NORMAL and STATIC overlay modes; otherwise the
  renderer substitutes a fully transparent overlay.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import NamedTuple, Optional, Sequence

from pyrsistent import pvector
from pyrsistent.typing import PVector

from mzxview.components.position import Position
from mzxview.components.robot import Sensor
from mzxview.types import SPACE_CHAR, ColorCode

TRANSPARENT_OVERLAY_COLOR: ColorCode = 0x07


class Cell(NamedTuple):
    thing: int
    color: int
    param: int


class OverlayCell(NamedTuple):
    char: int
    color: int


BLANK_OVERLAY_CELL = OverlayCell(SPACE_CHAR, TRANSPARENT_OVERLAY_COLOR)


class OverlayMode(IntEnum):
    OFF = 0
    NORMAL = 1
    STATIC = 2
    TRANSPARENT = 3


DRAWN_OVERLAY_MODES = frozenset({OverlayMode.NORMAL, OverlayMode.STATIC})


@dataclass(frozen=True)
class Board:
    """One playfield.

    Attributes:
        width: Width in cells.
        height: Height in cells.
        level: Visible layer, ``width * height`` cells.
        under: Hidden layer beneath ``level``, same length.
        overlay_mode: How the overlay layer is used.
        overlay: Optional overlay layer, same length as ``level``.
        player_pos: Where the player stands.
        sensors: Sensors placed on the board, addressed 1-based from cell params.
        name: Board title.
    """

    width: int
    height: int
    level: PVector[Cell]
    under: PVector[Cell]
    overlay_mode: OverlayMode = OverlayMode.OFF
    overlay: Optional[PVector[OverlayCell]] = None
    player_pos: Position = Position(0, 0)
    sensors: PVector[Sensor] = pvector()
    name: str = ""

    def __post_init__(self) -> None:
        size = self.width * self.height
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid board size {self.width}x{self.height}")
        if len(self.level) != size or len(self.under) != size:
            raise ValueError(
                f"Board layers must hold {size} cells "
                f"(level={len(self.level)}, under={len(self.under)})"
            )
        if self.overlay is not None and len(self.overlay) != size:
            raise ValueError(f"Overlay must hold {size} cells, got {len(self.overlay)}")

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def index_of(self, pos: Position) -> int:
        if not self.in_bounds(pos):
            raise IndexError(
                f"Out of bounds: {(pos.x, pos.y)} for board {self.width}x{self.height}"
            )
        return pos.y * self.width + pos.x

    def position_of(self, index: int) -> Position:
        return Position(index % self.width, index // self.width)

    def level_at(self, pos: Position) -> Cell:
        return self.level[self.index_of(pos)]

    def with_level_color(self, pos: Position, color: ColorCode) -> "Board":
        """Return a board whose level cell at ``pos`` carries ``color``."""
        index = self.index_of(pos)
        cell = self.level[index]
        return replace(self, level=self.level.set(index, cell._replace(color=color)))

    def visible_overlay(self) -> Sequence[OverlayCell]:
        """Overlay cells to composite, blank when the overlay is not drawn."""
        if self.overlay is not None and self.overlay_mode in DRAWN_OVERLAY_MODES:
            return self.overlay
        return [BLANK_OVERLAY_CELL] * (self.width * self.height)
