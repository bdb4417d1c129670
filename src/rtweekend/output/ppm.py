"""Plain-text PPM (P3) writer.

Layout:
    P3
    <width> <height>
    255
    R G B        one line per pixel, top row first, left to right

Example:
    >>> import io
    >>> import numpy as np
    >>> from rtweekend.output.ppm import write_ppm
    >>> stream = io.StringIO()
    >>> write_ppm(stream, np.zeros((1, 2, 3), dtype=np.uint8))
    >>> stream.getvalue()
    'P3\\n2 1\\n255\\n0 0 0\\n0 0 0\\n'
"""

from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt

from rtweekend.core.color import format_color

MAX_VALUE = 255


def write_ppm(stream: TextIO, pixels: npt.NDArray[np.uint8]) -> None:
    """Write encoded pixels of shape (height, width, 3) to a text stream.

    Raises:
        ValueError: If pixels is not a (height, width, 3) array.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected pixels of shape (height, width, 3), got {pixels.shape}")

    height, width = pixels.shape[:2]
    stream.write(f"P3\n{width} {height}\n{MAX_VALUE}\n")
    for row in pixels:
        for pixel in row:
            stream.write(format_color((int(pixel[0]), int(pixel[1]), int(pixel[2]))))
            stream.write("\n")


def save_ppm(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Write encoded pixels to a PPM file."""
    with open(filepath, "w") as f:
        write_ppm(f, pixels)
