"""Material variants shared by every scattering model.

Materials form a closed set of variants. On the host each variant is a
frozen dataclass holding only the parameters of its model; on the device a
single MaterialRecord struct carries a kind tag plus the union of those
parameters, and the scatter dispatcher branches on the tag.

Scenes store each material once and refer to it by index, so a material
shared by several spheres (the hollow glass shell idiom) is never copied.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar

import taichi as ti

from rtweekend.core.ray import vec3


class MaterialKind(IntEnum):
    """Tag of a material variant, used for dispatch in the integrator."""

    DEFAULT = 0
    LAMBERTIAN = 1
    METAL = 2
    DIELECTRIC = 3


@ti.dataclass
class MaterialRecord:
    """Device-side material: a kind tag plus the parameters of every variant.

    Attributes:
        kind: The MaterialKind value.
        albedo: Reflectance color (Lambertian, Metal).
        fuzz: Reflection blur in [0, 1] (Metal).
        ref_idx: Index of refraction (Dielectric).
    """

    kind: ti.i32
    albedo: vec3
    fuzz: ti.f64
    ref_idx: ti.f64


Color = tuple[float, float, float]


def validate_albedo(albedo: Color) -> Color:
    """Check an albedo color and return it as a float tuple.

    Raises:
        ValueError: If the color does not have three components or a
            component lies outside [0, 1].
    """
    if len(albedo) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(albedo)}")
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return (float(albedo[0]), float(albedo[1]), float(albedo[2]))


@dataclass(frozen=True, eq=False)
class Material:
    """Base class of the host-side material variants.

    Equality is identity: two spheres share a material only when they were
    given the same object.
    """

    kind: ClassVar[MaterialKind] = MaterialKind.DEFAULT

    def record_params(self) -> dict[str, Any]:
        """Parameters written to the device MaterialRecord."""
        return {"albedo": (0.0, 0.0, 0.0), "fuzz": 0.0, "ref_idx": 1.0}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a scene-description dictionary."""
        return {"type": self.kind.name.lower()}


@dataclass(frozen=True, eq=False)
class DefaultMaterial(Material):
    """Absorbs all light; the material of surfaces with none assigned."""

    kind: ClassVar[MaterialKind] = MaterialKind.DEFAULT
