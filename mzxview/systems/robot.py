"""Pre-render robot pass.

Before a board is drawn, each of its robots runs the leading part of its
program once. Execution stops at the first ``End`` or ``Wait``; there is no
clock to resume it. Only commands that change the picture have an effect:

* ``LoadCharSet`` / ``LoadPalette`` read a file relative to the world
  directory. A missing, unreadable or wrongly sized file is logged and leaves
  the state untouched; the pass carries on with the next command.
* ``SetColor`` replaces a single palette entry.
* ``Char`` changes the robot's own glyph.
* ``Color`` / ``PlayerColor`` recolor the level cell under the robot or the
  player.

Robots run in board order and share one counters context for the whole pass.
All functions are pure and return new values.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple

from pyrsistent import pvector

from mzxview.commands import (
    Char,
    Color,
    Command,
    LoadCharSet,
    LoadPalette,
    PlayerColor,
    SetColor,
    TERMINATING_COMMANDS,
)
from mzxview.components import Board, Color as PaletteColor, Position, Robot
from mzxview.counters import Resolve
from mzxview.errors import ResourceUnavailable
from mzxview.state import World, WorldState

logger = logging.getLogger(__name__)

RobotRun = Tuple[WorldState, Board, Robot]


def read_resource(world_path: Path, name: str) -> bytes:
    """Read an external charset or palette file.

    Raises:
        ResourceUnavailable: If the file cannot be opened or read.
    """
    path = world_path / name
    try:
        return path.read_bytes()
    except OSError as e:
        raise ResourceUnavailable(f"{path} ({e})") from e


def _load_charset(state: WorldState, world_path: Path, name: str) -> WorldState:
    try:
        charset = state.charset.load(read_resource(world_path, name))
    except ResourceUnavailable as e:
        logger.warning("Error loading charset %s: %s", name, e)
        return state
    logger.debug("Loaded charset %s", name)
    return replace(state, charset=charset)


def _load_palette(state: WorldState, world_path: Path, name: str) -> WorldState:
    try:
        data = read_resource(world_path, name)
    except ResourceUnavailable as e:
        logger.warning("Error opening palette %s: %s", name, e)
        return state
    logger.debug("Loaded palette %s (%d bytes)", name, len(data))
    return replace(state, palette=state.palette.load(data))


def _set_color(state: WorldState, command: SetColor, counters: Resolve) -> WorldState:
    index = counters.resolve(command.color)
    color = PaletteColor.clamped(
        counters.resolve(command.r),
        counters.resolve(command.g),
        counters.resolve(command.b),
    )
    try:
        palette = state.palette.set(index, color)
    except IndexError:
        logger.warning("Ignoring set color for palette index %d", index)
        return state
    return replace(state, palette=palette)


def _recolor(board: Board, pos: Position, color: int, what: str) -> Board:
    if not board.in_bounds(pos):
        logger.warning("Ignoring %s color at %s: outside board", what, pos)
        return board
    return board.with_level_color(pos, color & 0xFF)


def run_command(
    command: Command,
    run: RobotRun,
    world_path: Path,
    counters: Resolve,
) -> RobotRun:
    """Apply one non-terminating command to a robot's view of the world."""
    state, board, robot = run
    if isinstance(command, LoadCharSet):
        state = _load_charset(state, world_path, command.path)
    elif isinstance(command, LoadPalette):
        state = _load_palette(state, world_path, command.path)
    elif isinstance(command, SetColor):
        state = _set_color(state, command, counters)
    elif isinstance(command, Char):
        robot = robot.with_char(counters.resolve(command.ch) & 0xFF)
    elif isinstance(command, Color):
        board = _recolor(board, robot.position, counters.resolve(command.color), "robot")
    elif isinstance(command, PlayerColor):
        board = _recolor(
            board, board.player_pos, counters.resolve(command.color), "player"
        )
    return state, board, robot


def run_robot_until_end(
    state: WorldState,
    board: Board,
    robot: Robot,
    world_path: Path,
    counters: Resolve,
) -> RobotRun:
    """Run ``robot``'s program up to its first ``End`` or ``Wait``.

    Args:
        state (WorldState): Charset and palette before the robot runs.
        board (Board): Board the robot lives on.
        robot (Robot): Robot to run.
        world_path (Path): Directory charset and palette files are read from.
        counters (Resolve): Expression resolver shared by the whole pass.

    Returns:
        RobotRun: Updated ``(state, board, robot)``.
    """
    run: RobotRun = (state, board, robot)
    for command in robot.program:
        if isinstance(command, TERMINATING_COMMANDS):
            break
        run = run_command(command, run, world_path, counters)
    return run


def run_all_robots(
    world: World, board_id: int, counters: Optional[Resolve] = None
) -> World:
    """Run the pre-render pass for every robot on board ``board_id``.

    Raises:
        BoardIndexError: If ``board_id`` does not name a board.
    """
    board = world.board(board_id)
    state = world.state
    if counters is None:
        counters = world.counters

    robots = []
    for robot in world.robots(board_id):
        state, board, robot = run_robot_until_end(
            state, board, robot, world.path, counters
        )
        robots.append(robot)

    logger.debug("Ran %d robots on board %d", len(robots), board_id)
    world = world.with_board(board_id, board, pvector(robots))
    return replace(world, state=state)
