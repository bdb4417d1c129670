"""Dielectric (glass/water) material implementation.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when ratio * sin(theta) > 1

Where refraction is possible the material reflects with probability equal
to the Schlick reflectance and refracts otherwise. Clear dielectrics absorb
nothing, so the attenuation is always white.

A hollow glass ball is two concentric spheres sharing one Dielectric, the
inner one with a negative radius so its normals point inward.

Example:
    >>> from rtweekend.materials.dielectric import Dielectric
    >>> glass = Dielectric(ref_idx=1.5)
"""

from dataclasses import dataclass
from typing import Any, ClassVar

import taichi as ti
import taichi.math as tm

from rtweekend.core.ray import reflect, refract, schlick_reflectance, unit_vector, vec3
from rtweekend.core.sampler import random_float
from rtweekend.materials.base import Material, MaterialKind


@dataclass(frozen=True, eq=False)
class Dielectric(Material):
    """Dielectric material properties.

    Attributes:
        ref_idx: Index of refraction. Common values:
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4

    Raises:
        ValueError: If ref_idx is not positive.
    """

    kind: ClassVar[MaterialKind] = MaterialKind.DIELECTRIC

    ref_idx: float = 1.5

    def __post_init__(self) -> None:
        if self.ref_idx <= 0.0:
            raise ValueError(f"Index of refraction = {self.ref_idx} must be positive.")
        object.__setattr__(self, "ref_idx", float(self.ref_idx))

    def record_params(self) -> dict[str, Any]:
        return {"albedo": (1.0, 1.0, 1.0), "fuzz": 0.0, "ref_idx": self.ref_idx}

    def to_dict(self) -> dict[str, Any]:
        return {"type": "dielectric", "ref_idx": self.ref_idx}


@ti.func
def refraction_ratio(ref_idx: ti.f64, front_face: ti.i32) -> ti.f64:
    """1 / ref_idx when entering the medium, ref_idx when leaving it."""
    ratio = ref_idx
    if front_face == 1:
        ratio = 1.0 / ref_idx
    return ratio


@ti.func
def incident_angle(unit_direction: vec3, normal: vec3):
    """Return (cos_theta, sin_theta) of the incident angle."""
    cos_theta = tm.min(tm.dot(-unit_direction, normal), 1.0)
    sin_theta = tm.sqrt(1.0 - cos_theta * cos_theta)
    return cos_theta, sin_theta


@ti.func
def scatter_dielectric(ref_idx: ti.f64, incident_direction: vec3, normal: vec3, front_face: ti.i32, state: ti.u32):
    """Compute the scattered direction for a dielectric surface.

    Args:
        ref_idx: Index of refraction of the material.
        incident_direction: The incoming ray direction (any length).
        normal: The unit surface normal facing the incoming ray.
        front_face: 1 if the ray hits the outside of the surface,
            0 if it travels inside the material.
        state: The caller's RNG state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, state).
        Dielectrics always scatter. The reflect/refract draw is only taken
        when refraction is possible.
    """
    attenuation = vec3(1.0, 1.0, 1.0)
    ratio = refraction_ratio(ref_idx, front_face)

    unit_direction = unit_vector(incident_direction)
    cos_theta, sin_theta = incident_angle(unit_direction, normal)

    did_scatter = 1
    rng = state
    scattered_direction = reflect(unit_direction, normal)
    if ratio * sin_theta <= 1.0:
        r, rng = random_float(rng)
        if r >= schlick_reflectance(cos_theta, ratio):
            scattered_direction = refract(unit_direction, normal, ratio, cos_theta, sin_theta)

    return scattered_direction, attenuation, did_scatter, rng
