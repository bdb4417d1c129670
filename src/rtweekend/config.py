"""Render settings and Taichi runtime initialization."""

from dataclasses import dataclass

import taichi as ti
from loguru import logger

_ARCHES = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
    "cuda": ti.cuda,
    "vulkan": ti.vulkan,
    "metal": ti.metal,
}


@dataclass(frozen=True)
class RenderSettings:
    """Image and sampling configuration.

    Attributes:
        image_width: Image width in pixels.
        aspect_ratio: Width divided by height; the height is derived.
        samples_per_pixel: Camera rays averaged per pixel.
        max_depth: Bounce budget per camera ray.
        seed: Seed of the per-pixel random streams. Equal seeds give
            identical images.

    Raises:
        ValueError: If a setting is out of range. Both image dimensions must
            be at least 2, since sample coordinates are divided by
            (dimension - 1).
    """

    image_width: int = 384
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 100
    max_depth: int = 50
    seed: int = 0

    def __post_init__(self) -> None:
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.image_width < 2 or self.image_height < 2:
            raise ValueError(
                f"Image dimensions ({self.image_width}x{self.image_height}) must be at least 2x2"
            )
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @property
    def image_height(self) -> int:
        return int(self.image_width / self.aspect_ratio)


def init_taichi(arch: str = "cpu", seed: int = 0) -> None:
    """Initialize the Taichi runtime for rendering.

    Floats default to f64 so that literals inside Taichi functions match
    the f64 vectors used throughout the renderer.

    Args:
        arch: Backend name: "cpu", "gpu", "cuda", "vulkan" or "metal".
        seed: Seed of Taichi's own random generator. Rendering does not
            use it; every sample draws from an explicit per-pixel stream.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if arch not in _ARCHES:
        raise ValueError(f"Unknown Taichi arch: {arch!r} (expected one of {sorted(_ARCHES)})")
    ti.init(arch=_ARCHES[arch], default_fp=ti.f64, random_seed=seed)
    logger.debug("Taichi initialized (arch={}, default_fp=f64)", arch)
