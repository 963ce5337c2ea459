"""Rendering subpackage.

Turns a board plus the world's charset and palette into pixels:

* :mod:`~mzxview.renderer.glyphs` maps thing ids to glyphs.
* :mod:`~mzxview.renderer.colors` combines level, under and overlay colors.
* :mod:`~mzxview.renderer.raster` blits 8x14 glyphs into a NumPy framebuffer.
* :mod:`~mzxview.renderer.board` drives the above and hands the result to
  Pillow.
"""

from .board import BoardRenderer, draw_board, draw_image
from .colors import resolve_colors
from .glyphs import char_from_id
from .raster import draw_char

__all__ = [
    "BoardRenderer",
    "char_from_id",
    "draw_board",
    "draw_char",
    "draw_image",
    "resolve_colors",
]
