"""Charset component.

A charset is a flat byte store of fixed size glyph slots. Each slot is 14
bytes, one byte per pixel row, and each row byte holds 8 columns with the
most significant bit on the left. A charset is a value: loading new data
returns a fresh :class:`Charset` and never touches the original.
"""

from dataclasses import dataclass

from mzxview.errors import CharsetSizeError
from mzxview.types import CHAR_HEIGHT, Glyph

MIN_SLOTS = 256
CHARSET_BYTES = MIN_SLOTS * CHAR_HEIGHT


@dataclass(frozen=True)
class Charset:
    """Bitmap font.

    Attributes:
        data: Raw glyph rows, ``slot_count * 14`` bytes.
    """

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) % CHAR_HEIGHT != 0:
            raise ValueError(
                f"Charset length {len(self.data)} is not a multiple of {CHAR_HEIGHT}"
            )
        if len(self.data) // CHAR_HEIGHT < MIN_SLOTS:
            raise ValueError(f"Charset must contain at least {MIN_SLOTS} glyphs")

    @classmethod
    def blank(cls, slot_count: int = MIN_SLOTS) -> "Charset":
        return cls(bytes(slot_count * CHAR_HEIGHT))

    @property
    def slot_count(self) -> int:
        return len(self.data) // CHAR_HEIGHT

    def glyph(self, index: Glyph) -> bytes:
        """Return the 14 row bytes of glyph ``index``."""
        if not 0 <= index < self.slot_count:
            raise IndexError(f"Glyph {index} outside charset of {self.slot_count}")
        offset = index * CHAR_HEIGHT
        return self.data[offset : offset + CHAR_HEIGHT]

    def load(self, buffer: bytes) -> "Charset":
        """Return a charset holding ``buffer`` in place of the current data.

        Raises:
            CharsetSizeError: If ``buffer`` is not exactly as long as ``data``.
        """
        if len(buffer) != len(self.data):
            raise CharsetSizeError(len(self.data), len(buffer))
        return Charset(bytes(buffer))
