"""Command line entry point.

``mzxview <world-file> [<board#>] <out.png>`` renders one board of a world
to an image. Every failure prints a one-line diagnostic and exits with
status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence

from mzxview.config import ViewerConfig, configure_logging
from mzxview.errors import (
    BoardIndexError,
    FramebufferSizeError,
    ImageEncodeError,
    WorldLoadError,
)
from mzxview.levels import WorldLoader, load_world
from mzxview.renderer import BoardRenderer
from mzxview.systems.robot import run_all_robots
from mzxview.utils.image import save_image

logger = logging.getLogger(__name__)

USAGE = "mzxview world.json [<board#>] out.png"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mzxview",
        usage=USAGE,
        description="Render one board of a world to an image.",
    )
    parser.add_argument("paths", nargs="*", help=argparse.SUPPRESS)
    parser.add_argument(
        "--scale", type=int, default=1, help="Integer upscale factor (default: 1)"
    )
    parser.add_argument(
        "--format", dest="image_format", help="Output image format (default: from suffix)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def _fail(message: str) -> NoReturn:
    print(message)
    sys.exit(1)


def parse_config(argv: Optional[Sequence[str]] = None) -> ViewerConfig:
    args = build_parser().parse_args(argv)
    paths: List[str] = args.paths
    if len(paths) == 2:
        world_file, output = paths
        board = "0"
    elif len(paths) == 3:
        world_file, board, output = paths
    else:
        _fail(USAGE)

    try:
        board_num = int(board)
    except ValueError:
        _fail(f"Invalid board number {board!r}")

    try:
        return ViewerConfig(
            world_file=Path(world_file),
            output=Path(output),
            board=board_num,
            scale=args.scale,
            image_format=args.image_format,
            log_level=logging.DEBUG if args.verbose else logging.WARNING,
        )
    except ValueError as e:
        _fail(str(e))


def run(config: ViewerConfig, loader: WorldLoader = load_world) -> None:
    """Load, interpret, render and save as described by ``config``."""
    world = loader(config.world_file)
    world.check_board(config.board)
    world = run_all_robots(world, config.board)
    image = BoardRenderer(scale=config.scale).render(
        world.state, world.board(config.board), world.robots(config.board)
    )
    save_image(image, config.output, config.image_format)
    logger.info("Wrote board %d to %s", config.board, config.output)


def main(argv: Optional[Sequence[str]] = None) -> None:
    config = parse_config(argv)
    configure_logging(config.log_level)
    try:
        run(config)
    except (WorldLoadError, BoardIndexError, FramebufferSizeError, ImageEncodeError) as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
