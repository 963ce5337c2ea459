"""JSON world documents.

A world document is a JSON object holding the shared charset and palette, the
initial counters, and a list of boards. Each board carries its level, under
and overlay layers together with its robots and sensors. Charset and palette
may be given inline or as file names relative to the document's directory.

Everything is validated while loading, so a board that parses is safe to hand
to the robot pass and the renderer. Any problem raises :class:`WorldLoadError`.
"""

from __future__ import annotations

import binascii
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence

from pyrsistent import pvector

from mzxview.commands import (
    Char,
    Color,
    Command,
    End,
    Expr,
    LoadCharSet,
    LoadPalette,
    Other,
    PlayerColor,
    SetColor,
    Wait,
)
from mzxview.components import (
    Board,
    Cell,
    Charset,
    OverlayCell,
    OverlayMode,
    Palette,
    Position,
    Robot,
    Sensor,
)
from mzxview.components.palette import MIN_PALETTE_SIZE
from mzxview.counters import Counters
from mzxview.errors import WorldLoadError
from mzxview.state import World, WorldState
from mzxview.things import ROBOT_THINGS, Thing

logger = logging.getLogger(__name__)

BLANK_UNDER_CELL = Cell(Thing.SPACE, 0x07, 0)


class WorldLoader(Protocol):
    """Anything that turns a world file into a :class:`World`."""

    def __call__(self, path: Path) -> World: ...


# -------- Commands --------

CommandFactory = Callable[..., Command]

COMMAND_FACTORIES: Dict[str, CommandFactory] = {
    "end": End,
    "wait": Wait,
    "load_char_set": LoadCharSet,
    "load_palette": LoadPalette,
    "set_color": SetColor,
    "char": Char,
    "color": Color,
    "player_color": PlayerColor,
}


def _expr(value: Any, where: str) -> Expr:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise WorldLoadError(f"{where}: expected integer or counter name, got {value!r}")
    return value


def parse_command(raw: Any, where: str = "command") -> Command:
    """
    Parse one program entry. Entries are lists whose first element is the
    command name, e.g. ``["set_color", 5, 10, 20, 30]``. Unknown names become
    ``Other`` commands.
    """
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not raw or not isinstance(raw[0], str):
        raise WorldLoadError(f"{where}: malformed command {raw!r}")
    name = raw[0].lower()
    args = raw[1:]
    factory = COMMAND_FACTORIES.get(name)
    if factory is None:
        return Other(name, tuple(_expr(a, where) for a in args))
    if factory in (LoadCharSet, LoadPalette):
        if len(args) != 1 or not isinstance(args[0], str):
            raise WorldLoadError(f"{where}: {name} takes a single file name")
        return factory(args[0])
    try:
        return factory(*(_expr(a, where) for a in args))
    except TypeError as e:
        raise WorldLoadError(f"{where}: bad arguments for {name}: {args!r}") from e


# -------- Layers --------


def _byte(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise WorldLoadError(f"{where}: expected a byte, got {value!r}")
    return value


def _cells(raw: Any, size: int, where: str) -> List[Cell]:
    if not isinstance(raw, list) or len(raw) != size:
        raise WorldLoadError(f"{where}: expected {size} cells")
    cells: List[Cell] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, list) or len(entry) != 3:
            raise WorldLoadError(f"{where}[{i}]: expected [thing, color, param]")
        cells.append(Cell(*(_byte(v, f"{where}[{i}]") for v in entry)))
    return cells


def _overlay(raw: Any, size: int, where: str) -> List[OverlayCell]:
    if not isinstance(raw, list) or len(raw) != size:
        raise WorldLoadError(f"{where}: expected {size} overlay cells")
    cells: List[OverlayCell] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, list) or len(entry) != 2:
            raise WorldLoadError(f"{where}[{i}]: expected [char, color]")
        cells.append(OverlayCell(*(_byte(v, f"{where}[{i}]") for v in entry)))
    return cells


def _position(raw: Any, where: str) -> Position:
    if (
        not isinstance(raw, list)
        or len(raw) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in raw)
    ):
        raise WorldLoadError(f"{where}: expected [x, y]")
    return Position(raw[0], raw[1])


# -------- Entities --------


def _robot(raw: Mapping[str, Any], where: str) -> Robot:
    program = raw.get("program", [])
    if not isinstance(program, list):
        raise WorldLoadError(f"{where}.program: expected a list")
    return Robot(
        ch=_byte(raw.get("ch", 2), f"{where}.ch"),
        position=_position(raw.get("position"), f"{where}.position"),
        program=pvector(
            parse_command(cmd, f"{where}.program[{i}]") for i, cmd in enumerate(program)
        ),
        name=str(raw.get("name", "")),
    )


def _sensor(raw: Mapping[str, Any], where: str) -> Sensor:
    return Sensor(ch=_byte(raw.get("ch", 0), f"{where}.ch"), name=str(raw.get("name", "")))


def _objects(raw: Any, where: str) -> Sequence[Mapping[str, Any]]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(o, dict) for o in raw):
        raise WorldLoadError(f"{where}: expected a list of objects")
    return raw


def _check_references(board: Board, robots: Sequence[Robot], where: str) -> None:
    """Every robot and sensor cell must point at an existing entity."""
    for index, cell in enumerate(board.level):
        if cell.thing in ROBOT_THINGS:
            count, kind = len(robots), "robot"
        elif cell.thing == Thing.SENSOR:
            count, kind = len(board.sensors), "sensor"
        else:
            continue
        if not 1 <= cell.param <= count:
            raise WorldLoadError(
                f"{where}.level[{index}]: {kind} {cell.param} does not exist"
            )


def parse_board(raw: Any, where: str = "board") -> tuple[Board, List[Robot]]:
    if not isinstance(raw, dict):
        raise WorldLoadError(f"{where}: expected an object")
    width, height = raw.get("width"), raw.get("height")
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        raise WorldLoadError(f"{where}: width and height must be positive integers")
    size = width * height

    level = _cells(raw.get("level"), size, f"{where}.level")
    under = (
        _cells(raw["under"], size, f"{where}.under")
        if "under" in raw
        else [BLANK_UNDER_CELL] * size
    )
    try:
        overlay_mode = OverlayMode(raw.get("overlay_mode", OverlayMode.OFF))
    except ValueError as e:
        raise WorldLoadError(f"{where}.overlay_mode: {e}") from e
    overlay = (
        pvector(_overlay(raw["overlay"], size, f"{where}.overlay"))
        if raw.get("overlay") is not None
        else None
    )

    robots = [
        _robot(r, f"{where}.robots[{i}]")
        for i, r in enumerate(_objects(raw.get("robots"), f"{where}.robots"))
    ]
    sensors = [
        _sensor(s, f"{where}.sensors[{i}]")
        for i, s in enumerate(_objects(raw.get("sensors"), f"{where}.sensors"))
    ]

    board = Board(
        width=width,
        height=height,
        level=pvector(level),
        under=pvector(under),
        overlay_mode=overlay_mode,
        overlay=overlay,
        player_pos=_position(raw.get("player", [0, 0]), f"{where}.player"),
        sensors=pvector(sensors),
        name=str(raw.get("name", "")),
    )
    _check_references(board, robots, where)
    return board, robots


# -------- Shared resources --------


def _read_file(base: Path, name: str, what: str) -> bytes:
    try:
        return (base / name).read_bytes()
    except OSError as e:
        raise WorldLoadError(f"Error opening {what} {base / name} ({e})") from e


def parse_charset(raw: Any, base: Path) -> Charset:
    if raw is None:
        logger.warning("World has no charset; using a blank one")
        return Charset.blank()
    if isinstance(raw, str):
        data = _read_file(base, raw, "charset")
    elif isinstance(raw, dict) and isinstance(raw.get("hex"), str):
        try:
            data = binascii.unhexlify("".join(raw["hex"].split()))
        except (binascii.Error, ValueError) as e:
            raise WorldLoadError(f"charset: invalid hex data ({e})") from e
    else:
        raise WorldLoadError("charset: expected a file name or {\"hex\": ...}")
    try:
        return Charset(data)
    except ValueError as e:
        raise WorldLoadError(f"charset: {e}") from e


def parse_palette(raw: Any, base: Path) -> Palette:
    if raw is None:
        return Palette.default()
    if isinstance(raw, str):
        return Palette.default().load(_read_file(base, raw, "palette"))
    if isinstance(raw, list) and raw:
        triples = []
        for i, entry in enumerate(raw):
            if not isinstance(entry, list) or len(entry) != 3:
                raise WorldLoadError(f"palette[{i}]: expected [r, g, b]")
            triples.append(tuple(_byte(v, f"palette[{i}]") for v in entry))
        if len(triples) < MIN_PALETTE_SIZE:
            raise WorldLoadError(
                f"palette: expected at least {MIN_PALETTE_SIZE} colors, got {len(triples)}"
            )
        return Palette.from_triples(triples)
    raise WorldLoadError("palette: expected a file name or a list of [r, g, b]")


def parse_counters(raw: Any) -> Counters:
    if raw is None:
        return Counters()
    if not isinstance(raw, dict) or not all(
        isinstance(v, int) and not isinstance(v, bool) for v in raw.values()
    ):
        raise WorldLoadError("counters: expected a mapping of name to integer")
    return Counters.from_mapping(raw)


# -------- Entry points --------


def parse_world(document: Any, base: Path, title: Optional[str] = None) -> World:
    """
    Build a ``World`` from a decoded JSON document. ``base`` is the directory
    relative file names are resolved against, both here and later by robots.
    """
    if not isinstance(document, dict):
        raise WorldLoadError("World document must be a JSON object")
    raw_boards = document.get("boards")
    if not isinstance(raw_boards, list) or not raw_boards:
        raise WorldLoadError("World document must contain at least one board")

    state = WorldState(
        charset=parse_charset(document.get("charset"), base),
        palette=parse_palette(document.get("palette"), base),
    )
    boards = []
    board_robots = []
    for i, raw in enumerate(raw_boards):
        board, robots = parse_board(raw, f"boards[{i}]")
        boards.append(board)
        board_robots.append(pvector(robots))

    world = World(
        state=state,
        boards=pvector(boards),
        board_robots=pvector(board_robots),
        counters=parse_counters(document.get("counters")),
        path=base,
        title=str(document.get("title", title or "")),
    )
    logger.info("Loaded world %r with %d boards", world.title, len(boards))
    return world


def load_world(path: Path) -> World:
    """Load a world document from ``path``.

    Raises:
        WorldLoadError: If the file cannot be read or does not describe a world.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise WorldLoadError(f"Error opening {path} ({e})") from e
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise WorldLoadError(f"Error reading {path} ({e})") from e
    return parse_world(document, path.parent, title=path.stem)
