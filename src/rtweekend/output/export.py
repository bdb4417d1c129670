"""PNG export of encoded pixels.

Pixels are already gamma-corrected and quantized by the output encoder, so
they are written unchanged as an 8-bit RGB image.

Example:
    >>> from rtweekend.output.export import save_png
    >>> save_png(renderer.image(), "render.png")
"""

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def save_png(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save encoded pixels of shape (height, width, 3) as a PNG file.

    Row 0 of the array is the top of the image.

    Raises:
        ValueError: If pixels is not a (height, width, 3) uint8 array.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected pixels of shape (height, width, 3), got {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 pixels, got {pixels.dtype}")

    pil_image = PILImage.fromarray(np.ascontiguousarray(pixels))
    pil_image.save(filepath)
