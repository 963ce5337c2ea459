"""Exception hierarchy for the viewer.

Only :class:`ResourceUnavailable` is recovered from (by the pre-render
interpreter); every other error aborts the current render.
"""


class ViewerError(Exception):
    """Base class for all viewer errors."""


class WorldLoadError(ViewerError):
    """World data could not be parsed."""


class BoardIndexError(ViewerError, IndexError):
    """Requested board does not exist in the world."""

    def __init__(self, index: int, board_count: int):
        super().__init__(f"World only contains {board_count} boards")
        self.index = index
        self.board_count = board_count


class ResourceUnavailable(ViewerError):
    """An external charset or palette file could not be used."""


class CharsetSizeError(ResourceUnavailable):
    """Charset buffer length does not match the charset being replaced."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"expected {expected} bytes of charset data, got {actual}")
        self.expected = expected
        self.actual = actual


class FramebufferSizeError(ViewerError):
    """Framebuffer length does not match the declared image dimensions."""


class ImageEncodeError(ViewerError):
    """Writing the output image failed."""
