"""rtweekend: a Monte Carlo path tracer for spheres, built on Taichi.

Rays leave a positionable camera, bounce between diffuse, metal and glass
spheres and pick up a sky gradient when they escape. Each pixel averages
many jittered samples drawn from its own random stream, so renders are
reproducible for a given seed.

Subpackages:
    core: Vector and ray math, sampling, the integrator, encoding and the
        renderer
    geometry: Sphere intersection
    materials: Scattering models
    camera: The positionable camera
    scene: The scene aggregate, built-in scenes and JSON descriptions
    output: PPM and PNG writers

Example:
    >>> from rtweekend import Camera, Renderer, RenderSettings, init_taichi
    >>> from rtweekend.scene import SHOWCASE_CAMERA, material_showcase_scene
    >>> init_taichi()
    >>> renderer = Renderer(
    ...     material_showcase_scene(),
    ...     Camera.from_config(SHOWCASE_CAMERA),
    ...     RenderSettings(image_width=64, samples_per_pixel=10),
    ... )
    >>> sums = renderer.render()
"""

__version__ = "0.1.0"

from .camera import Camera, CameraConfig
from .config import RenderSettings, init_taichi
from .core.renderer import Renderer

__all__ = [
    "Camera",
    "CameraConfig",
    "RenderSettings",
    "Renderer",
    "init_taichi",
    "__version__",
]
