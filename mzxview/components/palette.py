"""Palette component.

Palette entries use the 6-bit per channel color space of the world format
(0-63). Rendering scales each channel by exactly 4 to reach 8-bit output, so
channels are clamped into range on the way in and the product always fits in
a byte.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from pyrsistent import pvector
from pyrsistent.typing import PVector

from mzxview.types import RGB8

MAX_CHANNEL = 63
CHANNEL_SCALE = 4
# Smallest palette every color code can index: 0xFF // n < n.
MIN_PALETTE_SIZE = 16


def clamp_channel(value: int) -> int:
    return max(0, min(MAX_CHANNEL, value))


@dataclass(frozen=True)
class Color:
    """Palette entry.

    Attributes:
        r: Red, 0-63.
        g: Green, 0-63.
        b: Blue, 0-63.
    """

    r: int
    g: int
    b: int

    @classmethod
    def clamped(cls, r: int, g: int, b: int) -> "Color":
        return cls(clamp_channel(r), clamp_channel(g), clamp_channel(b))

    def rgb8(self) -> RGB8:
        return (
            self.r * CHANNEL_SCALE,
            self.g * CHANNEL_SCALE,
            self.b * CHANNEL_SCALE,
        )


EGA_COLORS: Tuple[Tuple[int, int, int], ...] = (
    (0, 0, 0),
    (0, 0, 42),
    (0, 42, 0),
    (0, 42, 42),
    (42, 0, 0),
    (42, 0, 42),
    (42, 21, 0),
    (42, 42, 42),
    (21, 21, 21),
    (21, 21, 63),
    (21, 63, 21),
    (21, 63, 63),
    (63, 21, 21),
    (63, 21, 63),
    (63, 63, 21),
    (63, 63, 63),
)


@dataclass(frozen=True)
class Palette:
    """Ordered, fixed size list of colors.

    Attributes:
        colors: Entries indexed by palette index.
    """

    colors: PVector[Color]

    @classmethod
    def from_triples(cls, triples: Iterable[Tuple[int, int, int]]) -> "Palette":
        return cls(pvector(Color.clamped(r, g, b) for r, g, b in triples))

    @classmethod
    def default(cls) -> "Palette":
        return cls.from_triples(EGA_COLORS)

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> Color:
        return self.colors[index]

    def load(self, buffer: bytes) -> "Palette":
        """Overwrite leading entries from packed RGB bytes.

        Only complete triples are applied; a partial trailing triple and any
        triples past the palette size are ignored.
        """
        count = min(len(buffer) // 3, len(self.colors))
        colors = self.colors.evolver()
        for index in range(count):
            r, g, b = buffer[index * 3 : index * 3 + 3]
            colors[index] = Color.clamped(r, g, b)
        return Palette(colors.persistent())

    def set(self, index: int, color: Color) -> "Palette":
        if not 0 <= index < len(self.colors):
            raise IndexError(
                f"Palette index {index} outside palette of {len(self.colors)}"
            )
        return Palette(self.colors.set(index, color))
