"""Cell color resolution.

A color code packs two palette indices as ``bg * n + fg`` where ``n`` is the
palette size. Resolution happens in two ordered steps; swapping them changes
the output of every board using transparent overlays:

1. A level color with a zero background component takes its background from
   the under layer.
2. A visible overlay cell (any char but space) then either blends its
   foreground over that result (overlay background zero, color nonzero) or
   replaces the color outright. An overlay color of exactly ``0x00`` is a
   full replace, not a blend.
"""

from typing import Sequence

from mzxview.components.robot import Robot, Sensor
from mzxview.renderer.glyphs import char_from_id
from mzxview.types import SPACE_CHAR, ColorCode, FgBg, Glyph


def overlay_visible(overlay_char: Glyph) -> bool:
    return overlay_char != SPACE_CHAR


def overlay_see_through(overlay_color: ColorCode, num_colors: int) -> bool:
    return overlay_color // num_colors == 0 and overlay_color != 0x00


def resolve_colors(
    color: ColorCode,
    under_color: ColorCode,
    overlay_char: Glyph,
    overlay_color: ColorCode,
    num_colors: int,
) -> FgBg:
    """Return ``(fg, bg)`` palette indices for one cell."""
    if color // num_colors == 0:
        color = under_color // num_colors * num_colors + color % num_colors
    if overlay_visible(overlay_char):
        if overlay_see_through(overlay_color, num_colors):
            color = color // num_colors * num_colors + overlay_color
        else:
            color = overlay_color
    return color % num_colors, color // num_colors


def cell_glyph(
    thing_id: int,
    param: int,
    overlay_char: Glyph,
    robots: Sequence[Robot],
    sensors: Sequence[Sensor],
) -> Glyph:
    """Overlay char when visible, otherwise the glyph of the level thing."""
    if overlay_visible(overlay_char):
        return overlay_char
    return char_from_id(thing_id, param, robots, sensors)
