"""Viewer configuration and logging setup.

:class:`ViewerConfig` holds one run's options after command line parsing.
:func:`configure_logging` installs the single root handler the CLI uses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class ViewerConfig:
    world_file: Path
    output: Path
    board: int = 0
    scale: int = 1
    image_format: Optional[str] = None
    log_level: int = logging.WARNING

    def __post_init__(self) -> None:
        if self.board < 0:
            raise ValueError(f"Board number must not be negative, got {self.board}")
        if self.scale < 1:
            raise ValueError(f"Scale must be positive, got {self.scale}")


def configure_logging(level: int) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
