"""Thing enumeration.

Every board cell stores a one byte *thing id* naming what occupies it. The
numbering follows the world format; gaps in the id space are ids the format
never assigns. Ids not listed here are still valid cell contents and render
with the unknown glyph (see :mod:`mzxview.renderer.glyphs`).
"""

from enum import IntEnum


class Thing(IntEnum):
    """Closed set of board thing kinds keyed by their on-disk id."""

    SPACE = 0
    NORMAL = 1
    SOLID = 2
    TREE = 3
    LINE = 4
    CUSTOM_BLOCK = 5
    BREAKAWAY = 6
    CUSTOM_BREAK = 7
    BOULDER = 8
    CRATE = 9
    CUSTOM_PUSH = 10
    BOX = 11
    CUSTOM_BOX = 12
    FAKE = 13
    CARPET = 14
    FLOOR = 15
    TILES = 16
    CUSTOM_FLOOR = 17
    WEB = 18
    THICK_WEB = 19
    STILL_WATER = 20
    N_WATER = 21
    S_WATER = 22
    E_WATER = 23
    W_WATER = 24
    ICE = 25
    LAVA = 26
    CHEST = 27
    GEM = 28
    MAGIC_GEM = 29
    HEALTH = 30
    RING = 31
    POTION = 32
    ENERGIZER = 33
    GOOP = 34
    AMMO = 35
    BOMB = 36
    LIT_BOMB = 37
    EXPLOSION = 38
    KEY = 39
    LOCK = 40
    DOOR = 41
    OPEN_DOOR = 42
    STAIRS = 43
    CAVE = 44
    CW_ROTATE = 45
    CCW_ROTATE = 46
    GATE = 47
    OPEN_GATE = 48
    TRANSPORT = 49
    COIN = 50
    N_MOVING_WALL = 51
    S_MOVING_WALL = 52
    E_MOVING_WALL = 53
    W_MOVING_WALL = 54
    POUCH = 55
    PUSHER = 56
    SLIDER_NS = 57
    SLIDER_EW = 58
    LAZER = 59
    LAZER_GUN = 60
    BULLET = 61
    MISSILE = 62
    FIRE = 63
    FOREST = 65
    LIFE = 66
    WHIRLPOOL_1 = 67
    WHIRLPOOL_2 = 68
    WHIRLPOOL_3 = 69
    WHIRLPOOL_4 = 70
    INVIS_WALL = 71
    RICOCHET_PANEL = 72
    RICOCHET = 73
    MINE = 74
    SPIKE = 75
    CUSTOM_HURT = 76
    TEXT = 77
    SNAKE = 80
    EYE = 81
    THIEF = 82
    SLIMEBLOB = 83
    RUNNER = 84
    GHOST = 85
    DRAGON = 86
    FISH = 87
    SHARK = 88
    SPIDER = 89
    GOBLIN = 90
    SPITTING_TIGER = 91
    BULLET_GUN = 92
    SPINNING_GUN = 93
    BEAR = 94
    BEAR_CUB = 95
    MISSILE_GUN = 97
    SENSOR = 122
    ROBOT_PUSHABLE = 123
    ROBOT = 124
    SIGN = 125
    SCROLL = 126
    PLAYER = 127


ROBOT_THINGS = frozenset({Thing.ROBOT, Thing.ROBOT_PUSHABLE})
