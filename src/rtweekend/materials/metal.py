"""Metal (specular reflective) material implementation.

Metals reflect the incoming direction about the surface normal:

    R = V - 2(V . N)N

Rough metals perturb the mirror direction by a random point in a ball of
radius fuzz. A perturbed direction that ends up below the surface is
absorbed.

Example:
    >>> from rtweekend.materials.metal import Metal
    >>> gold = Metal(albedo=(0.8, 0.6, 0.2), fuzz=0.0)
    >>> Metal(albedo=(0.8, 0.8, 0.8), fuzz=3.0).fuzz
    1.0
"""

from dataclasses import dataclass
from typing import Any, ClassVar

import taichi as ti
import taichi.math as tm

from rtweekend.core.ray import reflect, unit_vector, vec3
from rtweekend.core.sampler import random_in_unit_sphere
from rtweekend.materials.base import Color, Material, MaterialKind, validate_albedo


@dataclass(frozen=True, eq=False)
class Metal(Material):
    """Metal material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Reflection blur, clamped to [0, 1] at construction.
            0 = perfect mirror, 1 = maximum fuzziness.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """

    kind: ClassVar[MaterialKind] = MaterialKind.METAL

    albedo: Color = (0.8, 0.8, 0.8)
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))
        object.__setattr__(self, "fuzz", min(max(float(self.fuzz), 0.0), 1.0))

    def record_params(self) -> dict[str, Any]:
        return {"albedo": self.albedo, "fuzz": self.fuzz, "ref_idx": 1.0}

    def to_dict(self) -> dict[str, Any]:
        return {"type": "metal", "albedo": list(self.albedo), "fuzz": self.fuzz}


@ti.func
def scatter_metal(albedo: vec3, fuzz: ti.f64, incident_direction: vec3, normal: vec3, state: ti.u32):
    """Compute the scattered direction for a metal surface.

    Args:
        albedo: The reflective color.
        fuzz: Reflection blur in [0, 1].
        incident_direction: The incoming ray direction (any length).
        normal: The unit surface normal facing the incoming ray.
        state: The caller's RNG state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, state)
        where did_scatter is 1 if the direction points away from the
        surface and 0 if the ray is absorbed.
    """
    reflected = reflect(unit_vector(incident_direction), normal)
    offset, rng = random_in_unit_sphere(state)
    scattered_direction = reflected + fuzz * offset

    did_scatter = 0
    if tm.dot(scattered_direction, normal) > 0.0:
        did_scatter = 1

    return scattered_direction, albedo, did_scatter, rng
