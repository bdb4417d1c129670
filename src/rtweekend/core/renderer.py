"""Image renderer: the per-pixel sampling loop.

The renderer walks the image rows from top to bottom. Each row is one kernel
launch that Taichi parallelizes over columns; every pixel draws
samples_per_pixel jittered camera rays, traces them with ray_color and
stores the radiance sum. A progress callback runs after each row.

Each pixel seeds its own random stream from (seed, column, row), so the
image depends only on the settings and the scene, never on thread
scheduling.

Example:
    >>> from rtweekend.camera.camera import Camera
    >>> from rtweekend.config import RenderSettings, init_taichi
    >>> from rtweekend.core.renderer import Renderer
    >>> from rtweekend.scene.presets import two_sphere_scene
    >>> init_taichi()
    >>> settings = RenderSettings(image_width=16, aspect_ratio=16 / 9, samples_per_pixel=8)
    >>> camera = Camera((0, 0, 0), (0, 0, -1), (0, 1, 0), 90.0, settings.aspect_ratio)
    >>> renderer = Renderer(two_sphere_scene(), camera, settings)
    >>> sums = renderer.render()
    >>> pixels = renderer.image()  # (9, 16, 3) uint8, row 0 = top
"""

import time
from collections.abc import Callable

import numpy as np
import numpy.typing as npt
import taichi as ti
from loguru import logger

from rtweekend.camera.camera import Camera
from rtweekend.config import RenderSettings
from rtweekend.core.color import encode_image
from rtweekend.core.integrator import ray_color
from rtweekend.core.ray import vec3
from rtweekend.core.sampler import random_float, random_in_unit_disk, seed_rng
from rtweekend.scene.hittable_list import HittableList

# Callback receives the number of rows still to render
ProgressCallback = Callable[[int], None]


@ti.data_oriented
class Renderer:
    """Renders a committed scene through a camera into radiance sums.

    Attributes:
        world: The scene; committed on construction.
        camera: The camera generating primary rays.
        settings: Image size, sampling and seed.
    """

    def __init__(self, world: HittableList, camera: Camera, settings: RenderSettings) -> None:
        world.commit()
        self.world = world
        self.camera = camera
        self.settings = settings
        self.width = settings.image_width
        self.height = settings.image_height

        # Radiance sums, row 0 = top of the image
        self._sums = ti.Vector.field(3, dtype=ti.f64, shape=(self.height, self.width))
        self._rendered = False

    @ti.kernel
    def _render_row(self, j: ti.i32, seed: ti.u32, samples: ti.i32, max_depth: ti.i32):
        """Render image row j (0 = bottom) for every column."""
        for i in range(self.width):
            rng = seed_rng(seed, i, j)
            pixel_color = vec3(0.0, 0.0, 0.0)
            for sample in range(samples):
                du, rng = random_float(rng)
                dv, rng = random_float(rng)
                s = (ti.cast(i, ti.f64) + du) / ti.cast(self.width - 1, ti.f64)
                t = (ti.cast(j, ti.f64) + dv) / ti.cast(self.height - 1, ti.f64)

                disk = vec3(0.0, 0.0, 0.0)
                if ti.static(self.camera.has_lens):
                    disk, rng = random_in_unit_disk(rng)

                ray = self.camera.get_ray(s, t, disk)
                color, rng = ray_color(ray, self.world, max_depth, rng)
                pixel_color += color

            self._sums[self.height - 1 - j, i] = pixel_color

    def render(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.float64]:
        """Render the full image.

        Args:
            callback: Called after each row with the number of rows left.
                Advisory only.

        Returns:
            Radiance sums of shape (height, width, 3), row 0 = top.
        """
        settings = self.settings
        logger.info(
            "Rendering {}x{} at {} spp, max depth {}, seed {}",
            self.width,
            self.height,
            settings.samples_per_pixel,
            settings.max_depth,
            settings.seed,
        )
        start_time = time.perf_counter()
        seed = settings.seed % (2**32)

        for j in range(self.height - 1, -1, -1):
            self._render_row(j, seed, settings.samples_per_pixel, settings.max_depth)
            if callback is not None:
                callback(j)

        sums = self._sums.to_numpy()
        self._rendered = True
        logger.info("Rendered in {:.2f}s", time.perf_counter() - start_time)
        return sums

    def sums(self) -> npt.NDArray[np.float64]:
        """Radiance sums of the last render, shape (height, width, 3).

        Raises:
            RuntimeError: If render() has not been called.
        """
        if not self._rendered:
            raise RuntimeError("Nothing rendered yet. Call render() first.")
        return self._sums.to_numpy()

    def image(self) -> npt.NDArray[np.uint8]:
        """Encoded 8-bit pixels of the last render, shape (height, width, 3).

        Raises:
            RuntimeError: If render() has not been called.
        """
        return encode_image(self.sums(), self.settings.samples_per_pixel)
