"""Immutable world snapshot.

A :class:`World` bundles everything needed to render any of its boards:

* :class:`WorldState` carries the resources every board shares, the charset
  and the palette.
* ``boards`` and ``board_robots`` are parallel: ``board_robots[i]`` holds the
  robots placed on ``boards[i]``.
* ``counters`` seeds the expression resolver used by robot programs.
* ``path`` is the directory relative to which robots load charset and
  palette files.

Nothing here is mutated in place. The pre-render interpreter returns new
``World`` values and the renderer only reads them, so the interpret-then-render
ordering is carried by data flow instead of shared mutable state.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path

from pyrsistent import pvector
from pyrsistent.typing import PVector

from mzxview.components import Board, Charset, Palette, Robot
from mzxview.counters import Counters
from mzxview.errors import BoardIndexError


@dataclass(frozen=True)
class WorldState:
    """Resources shared by all boards.

    Attributes:
        charset: Font used to draw every cell.
        palette: Colors indexed by the color codes stored in cells.
    """

    charset: Charset = field(default_factory=Charset.blank)
    palette: Palette = field(default_factory=Palette.default)


@dataclass(frozen=True)
class World:
    """Loaded world.

    Attributes:
        state: Shared charset and palette.
        boards: Boards in world order.
        board_robots: Robots of each board, parallel to ``boards``.
        counters: Initial counter values.
        path: Directory external resources are resolved against.
        title: World title.
    """

    state: WorldState
    boards: PVector[Board]
    board_robots: PVector[PVector[Robot]]
    counters: Counters = field(default_factory=Counters)
    path: Path = Path(".")
    title: str = ""

    def __post_init__(self) -> None:
        if len(self.boards) != len(self.board_robots):
            raise ValueError(
                f"{len(self.boards)} boards but {len(self.board_robots)} robot lists"
            )

    def check_board(self, board_id: int) -> None:
        if not 0 <= board_id < len(self.boards):
            raise BoardIndexError(board_id, len(self.boards))

    def board(self, board_id: int) -> Board:
        self.check_board(board_id)
        return self.boards[board_id]

    def robots(self, board_id: int) -> PVector[Robot]:
        self.check_board(board_id)
        return self.board_robots[board_id]

    def with_board(
        self, board_id: int, board: Board, robots: PVector[Robot]
    ) -> "World":
        self.check_board(board_id)
        return replace(
            self,
            boards=self.boards.set(board_id, board),
            board_robots=self.board_robots.set(board_id, pvector(robots)),
        )
