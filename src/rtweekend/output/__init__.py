"""Image output: PPM text and PNG files."""

from rtweekend.output.export import save_png
from rtweekend.output.ppm import save_ppm, write_ppm

__all__ = ["save_png", "save_ppm", "write_ppm"]
