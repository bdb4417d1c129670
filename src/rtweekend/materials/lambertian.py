"""Lambertian (ideal diffuse) material implementation.

A Lambertian surface scatters toward normal + u, where u is a point drawn
uniformly on the unit sphere. The resulting directions follow a
cos(theta) / pi distribution about the normal, which is exactly the
Lambertian BRDF times the cosine term, so the path weight reduces to the
albedo:

    attenuation = (albedo / pi) * cos_theta / (cos_theta / pi) = albedo

When u nearly cancels the normal the direction is close to zero length;
this case is rare and is left as is.

Example:
    >>> from rtweekend.materials.lambertian import Lambertian
    >>> red = Lambertian(albedo=(0.7, 0.3, 0.3))
    >>> # Within a Taichi kernel:
    >>> # direction, attenuation, did_scatter, rng = scatter_lambertian(albedo, normal, rng)
"""

from dataclasses import dataclass
from typing import Any, ClassVar

import taichi as ti

from rtweekend.core.ray import vec3
from rtweekend.core.sampler import random_unit_vector
from rtweekend.materials.base import Color, Material, MaterialKind, validate_albedo


@dataclass(frozen=True, eq=False)
class Lambertian(Material):
    """Lambertian material properties.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """

    kind: ClassVar[MaterialKind] = MaterialKind.LAMBERTIAN

    albedo: Color = (0.5, 0.5, 0.5)

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))

    def record_params(self) -> dict[str, Any]:
        return {"albedo": self.albedo, "fuzz": 0.0, "ref_idx": 1.0}

    def to_dict(self) -> dict[str, Any]:
        return {"type": "lambertian", "albedo": list(self.albedo)}


@ti.func
def scatter_lambertian(albedo: vec3, normal: vec3, state: ti.u32):
    """Sample a scattered direction for a Lambertian surface.

    Args:
        albedo: The diffuse reflectance color.
        normal: The unit surface normal facing the incoming ray.
        state: The caller's RNG state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, state).
        Lambertian surfaces always scatter.
    """
    unit, rng = random_unit_vector(state)
    scattered_direction = normal + unit
    did_scatter = 1
    return scattered_direction, albedo, did_scatter, rng
