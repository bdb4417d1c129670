"""Core rendering module.

Components:
    ray: Vector helpers, the Ray struct, reflection and refraction
    sampler: Explicit per-pixel random streams and sampling routines
    integrator: Path tracing of a single ray (ray_color)
    color: Encoding of radiance sums to 8-bit channels
    renderer: The per-pixel sampling loop over the image

The integrator and renderer depend on materials and scenes, so they are
imported from their modules rather than re-exported here.
"""

from .color import encode_color, encode_image, format_color
from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    ray_at,
    reflect,
    refract,
    schlick_reflectance,
    unit_vector,
    vec3,
)
from .sampler import (
    random_float,
    random_float_range,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    random_vec3,
    random_vec3_range,
    seed_rng,
)

__all__ = [
    "vec3",
    "Ray",
    "make_ray",
    "ray_at",
    "length",
    "length_squared",
    "unit_vector",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_reflectance",
    "seed_rng",
    "random_float",
    "random_float_range",
    "random_vec3",
    "random_vec3_range",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
    "encode_image",
    "encode_color",
    "format_color",
]
