"""Material dispatch and scene-description parsing for materials."""

from typing import Any

import taichi as ti

from rtweekend.core.ray import Ray, vec3
from rtweekend.geometry.sphere import HitRecord
from rtweekend.materials.base import DefaultMaterial, Material, MaterialKind, MaterialRecord
from rtweekend.materials.dielectric import Dielectric, scatter_dielectric
from rtweekend.materials.lambertian import Lambertian, scatter_lambertian
from rtweekend.materials.metal import Metal, scatter_metal


@ti.func
def scatter(material: MaterialRecord, ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Dispatch to the scattering model of the struck material.

    Args:
        material: The device record of the struck material.
        ray_in: The incoming ray.
        rec: The hit record of the intersection.
        state: The caller's RNG state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, state).
        The scattered ray starts at rec.point. did_scatter is 0 when the
        ray is absorbed, in which case the other values are meaningless.
    """
    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0
    rng = state

    if material.kind == int(MaterialKind.LAMBERTIAN):
        scattered_direction, attenuation, did_scatter, rng = scatter_lambertian(
            material.albedo, rec.normal, rng
        )

    elif material.kind == int(MaterialKind.METAL):
        scattered_direction, attenuation, did_scatter, rng = scatter_metal(
            material.albedo, material.fuzz, ray_in.direction, rec.normal, rng
        )

    elif material.kind == int(MaterialKind.DIELECTRIC):
        scattered_direction, attenuation, did_scatter, rng = scatter_dielectric(
            material.ref_idx, ray_in.direction, rec.normal, rec.front_face, rng
        )

    return scattered_direction, attenuation, did_scatter, rng


def material_from_dict(data: dict[str, Any]) -> Material:
    """Build a host-side material from a scene-description dictionary.

    Args:
        data: A mapping with a "type" key ("lambertian", "metal",
            "dielectric" or "default") and the parameters of that type.

    Raises:
        ValueError: If the type is unknown or a parameter is invalid.
    """
    mat_type = data.get("type")
    if mat_type == "lambertian":
        return Lambertian(albedo=tuple(data["albedo"]))
    if mat_type == "metal":
        return Metal(albedo=tuple(data["albedo"]), fuzz=data.get("fuzz", 0.0))
    if mat_type == "dielectric":
        return Dielectric(ref_idx=data["ref_idx"])
    if mat_type == "default":
        return DefaultMaterial()
    raise ValueError(f"Unknown material type: {mat_type}")
