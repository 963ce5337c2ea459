"""Board rendering.

Walks a board's level, under and overlay layers in row-major order, resolves
each cell's glyph and colors, and rasterizes the result into a fresh
framebuffer. :class:`BoardRenderer` wraps the functional entry points with
output options, mirroring how callers hold on to a configured renderer.
"""

import logging
from typing import Optional, Sequence

from PIL import Image

from mzxview.components import Board, Robot
from mzxview.errors import FramebufferSizeError
from mzxview.renderer.colors import cell_glyph, resolve_colors
from mzxview.renderer.raster import draw_char, new_framebuffer
from mzxview.state import WorldState
from mzxview.types import BYTES_PER_PIXEL, CHAR_HEIGHT, CHAR_WIDTH
from mzxview.utils.image import UInt8Array, framebuffer_to_image, upscale

logger = logging.getLogger(__name__)


def draw_board(
    state: WorldState, board: Board, robots: Sequence[Robot]
) -> UInt8Array:
    """Rasterize every cell of ``board`` and return the framebuffer."""
    charset = state.charset
    palette = state.palette
    num_colors = len(palette)

    stride = board.width * CHAR_WIDTH * BYTES_PER_PIXEL
    pixels = new_framebuffer(board.width, board.height)
    overlay = board.visible_overlay()

    for index, (level, under, over) in enumerate(
        zip(board.level, board.under, overlay)
    ):
        ch = cell_glyph(level.thing, level.param, over.char, robots, board.sensors)
        fg, bg = resolve_colors(
            level.color, under.color, over.char, over.color, num_colors
        )
        pos = board.position_of(index)
        draw_char(ch, fg, bg, pos.x, pos.y, stride, charset, palette, pixels)
    return pixels


def draw_image(
    state: WorldState, board: Board, robots: Sequence[Robot]
) -> Optional[Image.Image]:
    """Render ``board`` to an RGB image, or ``None`` if the buffer is malformed."""
    pixels = draw_board(state, board, robots)
    return framebuffer_to_image(
        pixels, board.width * CHAR_WIDTH, board.height * CHAR_HEIGHT
    )


class BoardRenderer:
    scale: int

    def __init__(self, scale: int = 1):
        if scale < 1:
            raise ValueError(f"Scale must be positive, got {scale}")
        self.scale = scale

    def render(
        self, state: WorldState, board: Board, robots: Sequence[Robot]
    ) -> Image.Image:
        image = draw_image(state, board, robots)
        if image is None:
            raise FramebufferSizeError("Error creating image from pixel buffer")
        logger.debug(
            "Rendered %dx%d board to %dx%d pixels",
            board.width,
            board.height,
            image.width,
            image.height,
        )
        return upscale(image, self.scale)
