"""Ray data structure and vector utilities.

This module provides the Ray dataclass and the vector helpers shared by the
geometry, material and camera modules. Vectors are Taichi 3-component f64
vectors; the same type is used for points, directions and colors.

Example:
    >>> import taichi as ti
    >>> from rtweekend.config import init_taichi
    >>> init_taichi()
    >>> from rtweekend.core.ray import Ray, ray_at, vec3
    >>> @ti.kernel
    ... def point() -> vec3:
    ...     ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    ...     return ray_at(ray, 5.0)  # (0, 0, -5)
"""

import taichi as ti
import taichi.math as tm

# Vector3 / Point3 / Color
vec3 = ti.types.vector(3, ti.f64)


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Not required to be unit length.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f64) -> vec3:
    """Compute the point origin + t * direction."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> ti.f64:
    return tm.sqrt(tm.dot(v, v))


@ti.func
def length_squared(v: vec3) -> ti.f64:
    return tm.dot(v, v)


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Scale a vector to unit length.

    The division is not guarded: a zero-length input yields non-finite
    components.
    """
    return v / length(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f64:
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    return tm.cross(a, b)


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Reflect v about the unit normal n.

    Args:
        v: The incoming direction (pointing toward the surface).
        n: The surface normal (unit length).

    Returns:
        v - 2 * dot(v, n) * n
    """
    return v - 2.0 * tm.dot(v, n) * n


@ti.func
def refract(uv: vec3, n: vec3, ratio: ti.f64, cos_theta: ti.f64, sin_theta: ti.f64) -> vec3:
    """Refract a unit direction through a surface using Snell's law.

    The caller has already checked for total internal reflection, so
    ratio * sin_theta <= 1 holds here.

    Args:
        uv: The incoming unit direction.
        n: The surface normal facing the incoming ray.
        ratio: Refractive index ratio (incident over transmitted).
        cos_theta: Cosine of the incident angle, dot(-uv, n) clamped to 1.
        sin_theta: Sine of the incident angle.

    Returns:
        ratio * (uv + cos_theta * n) - n * sqrt(1 - ratio^2 * sin_theta^2)
    """
    return ratio * (uv + cos_theta * n) - n * tm.sqrt(1.0 - ratio * ratio * sin_theta * sin_theta)


@ti.func
def schlick_reflectance(cosine: ti.f64, ratio: ti.f64) -> ti.f64:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ratio: Ratio of refractive indices.

    Returns:
        r0 + (1 - r0) * (1 - cosine)^5 with r0 = ((1 - ratio) / (1 + ratio))^2.
    """
    r0 = ((1.0 - ratio) / (1.0 + ratio)) ** 2
    return r0 + (1.0 - r0) * ((1.0 - cosine) ** 5)
