"""Thing id to glyph resolution.

The glyph table is built once at import and covers the full byte range of
thing ids, so lookup never fails for ids a newer world format might
introduce: anything without a mapping draws as ``'!'``.

Three kinds of entry exist:

* fixed glyphs (walls, items, creatures, ...) that ignore the cell parameter,
* parametric things whose glyph *is* the cell parameter (custom tiles, text,
  moving walls),
* robots and sensors, whose glyph is read from the entity the parameter
  points to.
"""

from typing import Dict, Sequence, Tuple

from mzxview.components.robot import Robot, Sensor, SlotIndex
from mzxview.things import ROBOT_THINGS, Thing
from mzxview.types import SPACE_CHAR, UNKNOWN_CHAR, Glyph, Param, ThingID

FIXED_GLYPHS: Dict[Thing, Glyph] = {
    Thing.SPACE: SPACE_CHAR,
    Thing.NORMAL: 178,
    Thing.SOLID: 219,
    Thing.TREE: 6,
    Thing.BREAKAWAY: 177,
    Thing.BOULDER: 233,
    Thing.CRATE: 254,
    Thing.BOX: 254,
    Thing.FAKE: 178,
    Thing.CARPET: 177,
    Thing.FLOOR: 176,
    Thing.TILES: 254,
    Thing.STILL_WATER: 176,
    Thing.N_WATER: 24,
    Thing.S_WATER: 25,
    Thing.E_WATER: 26,
    Thing.W_WATER: 27,
    Thing.CHEST: 160,
    Thing.GEM: 4,
    Thing.MAGIC_GEM: 4,
    Thing.HEALTH: 3,
    Thing.RING: 9,
    Thing.POTION: 150,
    Thing.ENERGIZER: 7,
    Thing.GOOP: 176,
    Thing.BOMB: 11,
    Thing.EXPLOSION: 177,
    Thing.KEY: 12,
    Thing.LOCK: 10,
    Thing.STAIRS: 240,
    Thing.CAVE: 239,
    Thing.GATE: 22,
    Thing.OPEN_GATE: 95,
    Thing.COIN: 7,
    Thing.POUCH: 229,
    Thing.SLIDER_NS: 18,
    Thing.SLIDER_EW: 29,
    Thing.LAZER_GUN: 206,
    Thing.FOREST: 178,
    Thing.WHIRLPOOL_1: 54,
    Thing.WHIRLPOOL_2: 64,
    Thing.WHIRLPOOL_3: 57,
    Thing.WHIRLPOOL_4: 149,
    Thing.INVIS_WALL: SPACE_CHAR,
    Thing.RICOCHET: 42,
    Thing.SNAKE: 235,
    Thing.EYE: 236,
    Thing.THIEF: 1,
    Thing.SLIMEBLOB: 42,
    Thing.RUNNER: 2,
    Thing.GHOST: 234,
    Thing.DRAGON: 21,
    Thing.FISH: 224,
    Thing.SHARK: 94,
    Thing.SPIDER: 15,
    Thing.GOBLIN: 5,
    Thing.SPITTING_TIGER: 227,
    Thing.BEAR: 153,
    Thing.BEAR_CUB: 148,
    Thing.SIGN: 226,
    Thing.SCROLL: 232,
    Thing.PLAYER: 2,
}

PARAMETRIC_THINGS = frozenset(
    {
        Thing.CUSTOM_BLOCK,
        Thing.CUSTOM_BREAK,
        Thing.CUSTOM_PUSH,
        Thing.CUSTOM_BOX,
        Thing.CUSTOM_FLOOR,
        Thing.N_MOVING_WALL,
        Thing.S_MOVING_WALL,
        Thing.E_MOVING_WALL,
        Thing.W_MOVING_WALL,
        Thing.CUSTOM_HURT,
        Thing.TEXT,
    }
)

# Sentinels stored in the table for entries resolved at lookup time.
_PARAM = -1
_ROBOT = -2
_SENSOR = -3


def _build_table() -> Tuple[int, ...]:
    table = [UNKNOWN_CHAR] * 256
    for thing, glyph in FIXED_GLYPHS.items():
        table[thing] = glyph
    for thing in PARAMETRIC_THINGS:
        table[thing] = _PARAM
    for thing in ROBOT_THINGS:
        table[thing] = _ROBOT
    table[Thing.SENSOR] = _SENSOR
    return tuple(table)


GLYPH_TABLE = _build_table()


def char_from_id(
    thing_id: ThingID,
    param: Param,
    robots: Sequence[Robot],
    sensors: Sequence[Sensor],
) -> Glyph:
    """Return the glyph drawn for a cell.

    Args:
        thing_id: Cell thing id (0-255).
        param: Cell parameter byte.
        robots: Board robots, addressed 1-based by ``param``.
        sensors: Board sensors, addressed 1-based by ``param``.

    Returns:
        Glyph index into the charset.

    Raises:
        IndexError: If a robot or sensor cell points past its collection.
    """
    entry = GLYPH_TABLE[thing_id & 0xFF]
    if entry >= 0:
        return entry
    if entry == _PARAM:
        return param
    if entry == _ROBOT:
        return robots[SlotIndex.from_param(param, robots, "robot").value].ch
    return sensors[SlotIndex.from_param(param, sensors, "sensor").value].ch
