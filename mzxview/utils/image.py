from pathlib import Path
from typing import Optional, Union

import numpy as np
import numpy.typing as npt
from PIL import Image

from mzxview.errors import ImageEncodeError

# Type aliases for clarity
UInt8Array = npt.NDArray[np.uint8]


def framebuffer_to_image(
    pixels: UInt8Array, width: int, height: int
) -> Optional[Image.Image]:
    """
    Wrap a flat RGB framebuffer in a PIL image. Returns None when the buffer
    length does not match width * height * 3.
    """
    if pixels.dtype != np.uint8 or pixels.size != width * height * 3:
        return None
    return Image.frombytes("RGB", (width, height), pixels.tobytes())


def upscale(image: Image.Image, scale: int) -> Image.Image:
    """Integer nearest-neighbour upscale; keeps glyph edges sharp."""
    if scale == 1:
        return image
    return image.resize(
        (image.width * scale, image.height * scale), Image.Resampling.NEAREST
    )


def save_image(
    image: Image.Image, path: Union[str, Path], image_format: Optional[str] = None
) -> None:
    """
    Encode `image` to `path`. The format defaults to the one implied by the
    file suffix, falling back to PNG.
    """
    path = Path(path)
    if image_format is None and path.suffix.lower() not in Image.registered_extensions():
        image_format = "PNG"
    try:
        image.save(path, format=image_format)
    except (OSError, ValueError, KeyError) as e:
        raise ImageEncodeError(f"Failed to save {path} ({e}).") from e
