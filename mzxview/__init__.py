"""Board viewer for tile-based worlds.

Loads a world, runs the render-relevant prefix of each robot program on the
chosen board, and rasterizes the board with the world's bitmap font and
palette. See :mod:`mzxview.cli` for the command line front end.
"""

from mzxview.levels import load_world
from mzxview.renderer import BoardRenderer, draw_board, draw_image
from mzxview.state import World, WorldState
from mzxview.systems.robot import run_all_robots

__all__ = [
    "BoardRenderer",
    "World",
    "WorldState",
    "draw_board",
    "draw_image",
    "load_world",
    "run_all_robots",
]
