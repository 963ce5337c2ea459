"""Glyph rasterization into a flat RGB framebuffer.

The framebuffer is a one dimensional ``uint8`` array of
``width * 8 * height * 14 * 3`` bytes, row major, 3 bytes per pixel. It is
never grown: a blit that would land outside it raises instead.
"""

import numpy as np

from mzxview.components import Charset, Palette
from mzxview.types import BYTES_PER_PIXEL, CHAR_HEIGHT, CHAR_WIDTH, Glyph
from mzxview.utils.image import UInt8Array

CELL_ROW_BYTES = CHAR_WIDTH * BYTES_PER_PIXEL


def framebuffer_size(width: int, height: int) -> int:
    """Byte length of the framebuffer for a ``width`` x ``height`` cell board."""
    return width * CHAR_WIDTH * height * CHAR_HEIGHT * BYTES_PER_PIXEL


def new_framebuffer(width: int, height: int) -> UInt8Array:
    return np.zeros(framebuffer_size(width, height), dtype=np.uint8)


def glyph_mask(charset: Charset, ch: Glyph) -> np.ndarray:
    """Return a 14x8 boolean mask of glyph ``ch``, most significant bit first."""
    rows = np.frombuffer(charset.glyph(ch), dtype=np.uint8)
    return np.unpackbits(rows[:, np.newaxis], axis=1).astype(bool)


def draw_char(
    ch: Glyph,
    fg_color: int,
    bg_color: int,
    x: int,
    y: int,
    stride: int,
    charset: Charset,
    palette: Palette,
    pixels: UInt8Array,
) -> None:
    """Blit one glyph at cell ``(x, y)``.

    Args:
        ch: Glyph index.
        fg_color: Palette index for set bits.
        bg_color: Palette index for clear bits.
        x: Cell column.
        y: Cell row.
        stride: Bytes per framebuffer pixel row.
        charset: Font to read the glyph from.
        palette: Colors to draw with.
        pixels: Flat framebuffer, written in place.

    Raises:
        ValueError: If the cell falls outside ``pixels``.
    """
    fg = np.array(palette[fg_color].rgb8(), dtype=np.uint8)
    bg = np.array(palette[bg_color].rgb8(), dtype=np.uint8)
    block = np.where(glyph_mask(charset, ch)[..., np.newaxis], fg, bg)

    rows = pixels.reshape(-1, stride)
    top = y * CHAR_HEIGHT
    left = x * CELL_ROW_BYTES
    target = rows[top : top + CHAR_HEIGHT, left : left + CELL_ROW_BYTES]
    if x < 0 or y < 0 or target.shape != (CHAR_HEIGHT, CELL_ROW_BYTES):
        raise ValueError(f"Cell {(x, y)} lies outside the framebuffer")
    target[...] = block.reshape(CHAR_HEIGHT, CELL_ROW_BYTES)
