"""Position component.

Integer board coordinates in cells. ``x`` is the column, ``y`` the row.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Board coordinate.

    Attributes:
        x: Column index (0 at left).
        y: Row index (0 at top).
    """

    x: int
    y: int
