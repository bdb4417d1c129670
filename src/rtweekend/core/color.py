"""Output encoding of accumulated radiance to 8-bit channels.

A pixel's radiance sum over S samples is averaged, gamma-corrected with
gamma = 2.0 (a square root per channel), clamped to [0, 0.999] and scaled
by 256 with truncation, so a full-white average maps to 255 and black to 0.

Example:
    >>> from rtweekend.core.color import encode_color, format_color
    >>> encode_color((100.0, 100.0, 100.0), 100)
    (255, 255, 255)
    >>> format_color(encode_color((25.0, 0.0, 100.0), 100))
    '128 0 255'
"""

import numpy as np
import numpy.typing as npt

# Largest value kept before scaling by 256, so 1.0 maps to 255
CLAMP_MAX = 0.999


def encode_image(sums: npt.NDArray[np.floating], samples_per_pixel: int) -> npt.NDArray[np.uint8]:
    """Encode an array of radiance sums.

    Args:
        sums: Array of shape (..., 3) holding per-pixel radiance sums.
        samples_per_pixel: Number of samples accumulated in each sum.

    Returns:
        Array of the same shape with dtype uint8. Non-finite channels
        encode as 0 (NaN) or are clamped (infinity).

    Raises:
        ValueError: If samples_per_pixel is not positive.
    """
    if samples_per_pixel <= 0:
        raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")

    scale = 1.0 / samples_per_pixel
    with np.errstate(invalid="ignore"):
        # gamma = 2.0
        corrected = np.sqrt(np.asarray(sums, dtype=np.float64) * scale)
    corrected = np.nan_to_num(corrected, nan=0.0, posinf=CLAMP_MAX, neginf=0.0)
    clamped = np.clip(corrected, 0.0, CLAMP_MAX)
    return (256.0 * clamped).astype(np.uint8)


def encode_color(pixel_sum: tuple[float, float, float], samples_per_pixel: int) -> tuple[int, int, int]:
    """Encode one pixel's radiance sum as (R, G, B) integers in [0, 255]."""
    r, g, b = encode_image(np.array(pixel_sum, dtype=np.float64), samples_per_pixel)
    return (int(r), int(g), int(b))


def format_color(rgb: tuple[int, int, int]) -> str:
    """Format an encoded pixel as a PPM text triple."""
    return f"{rgb[0]} {rgb[1]} {rgb[2]}"
