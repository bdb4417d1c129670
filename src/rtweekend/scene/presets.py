"""Built-in scenes and their default cameras.

Two scenes are provided:
- two_sphere_scene: a diffuse red sphere resting on a large yellow ground
  sphere, seen head-on.
- material_showcase_scene: one sphere of each material. A diffuse sphere in
  the centre, gold metal on the right and a hollow glass sphere on the left.
  The glass is hollow because an inner sphere of negative radius shares the
  outer sphere's dielectric, which flips its normals inward.

Example:
    >>> from rtweekend.camera.camera import Camera
    >>> from rtweekend.scene.presets import SHOWCASE_CAMERA, material_showcase_scene
    >>> world = material_showcase_scene()
    >>> len(world), len(world.materials)
    (5, 4)
    >>> camera = Camera.from_config(SHOWCASE_CAMERA)
"""

from rtweekend.camera.camera import CameraConfig
from rtweekend.materials import Dielectric, Lambertian, Metal
from rtweekend.scene.hittable_list import HittableList

# =============================================================================
# Default Cameras
# =============================================================================

# Looking down -z from the origin
TWO_SPHERE_CAMERA = CameraConfig(
    look_from=(0.0, 0.0, 0.0),
    look_at=(0.0, 0.0, -1.0),
    view_up=(0.0, 1.0, 0.0),
    vfov=90.0,
)

# Above and to the left of the glass sphere
SHOWCASE_CAMERA = CameraConfig(
    look_from=(-2.0, 2.0, 1.0),
    look_at=(0.0, 0.0, -1.0),
    view_up=(0.0, 1.0, 0.0),
    vfov=90.0,
)


def two_sphere_scene() -> HittableList:
    """A diffuse sphere on a ground sphere."""
    world = HittableList()
    world.add_sphere((0.0, -100.5, -1.0), 100.0, Lambertian((0.8, 0.8, 0.0)))
    world.add_sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.7, 0.3, 0.3)))
    return world


def material_showcase_scene() -> HittableList:
    """Diffuse, metal and hollow glass spheres on a ground sphere.

    Returns:
        A HittableList of five spheres sharing four materials.
    """
    diffuse = Lambertian((0.7, 0.3, 0.3))
    ground = Lambertian((0.8, 0.8, 0.0))
    gold = Metal((0.8, 0.6, 0.2), fuzz=0.0)
    glass = Dielectric(1.5)

    world = HittableList()
    world.add_sphere((0.0, 0.0, -1.0), 0.5, diffuse)
    world.add_sphere((0.0, -100.5, -1.0), 100.0, ground)
    world.add_sphere((1.0, 0.0, -1.0), 0.5, gold)
    world.add_sphere((-1.0, 0.0, -1.0), 0.5, glass)
    world.add_sphere((-1.0, 0.0, -1.0), -0.45, glass)
    return world


PRESETS = {
    "two-spheres": (two_sphere_scene, TWO_SPHERE_CAMERA),
    "showcase": (material_showcase_scene, SHOWCASE_CAMERA),
}
