"""Materials module for the scattering models.

Components:
    base: Material variants, device MaterialRecord and validation helpers
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with fuzz
    dielectric: Refraction with Schlick reflectance
    scatter: Dispatch over the variants and scene-description parsing

Each scatter function takes the caller's RNG state and returns
(scattered_direction, attenuation, did_scatter, state).
"""

from .base import DefaultMaterial, Material, MaterialKind, MaterialRecord
from .dielectric import Dielectric, scatter_dielectric
from .lambertian import Lambertian, scatter_lambertian
from .metal import Metal, scatter_metal
from .scatter import material_from_dict, scatter

__all__ = [
    "Material",
    "MaterialKind",
    "MaterialRecord",
    "DefaultMaterial",
    "Lambertian",
    "Metal",
    "Dielectric",
    "scatter",
    "scatter_lambertian",
    "scatter_metal",
    "scatter_dielectric",
    "material_from_dict",
]
