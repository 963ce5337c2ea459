"""Common type aliases.

Board data is byte oriented: every thing id, color code, parameter and glyph
index fits in a single unsigned byte. The aliases below only document intent;
values are plain ``int`` at runtime.
"""

from typing import Tuple

ThingID = int
ColorCode = int
Param = int
Glyph = int

# Palette index pair produced by color resolution.
FgBg = Tuple[int, int]

# Raw 8-bit output pixel.
RGB8 = Tuple[int, int, int]

CHAR_WIDTH = 8
CHAR_HEIGHT = 14
BYTES_PER_PIXEL = 3

SPACE_CHAR: Glyph = 32
UNKNOWN_CHAR: Glyph = ord("!")
