"""Scene aggregate: the list of spheres and the shared material table.

The HittableList is built on the host, committed once to Taichi fields, and
then read by the render kernels. Spheres and materials use a Structure of
Arrays layout; each sphere stores the index of its material, and a material
object added to several spheres is stored once.

Example:
    >>> from rtweekend.scene.hittable_list import HittableList
    >>> from rtweekend.materials import Dielectric, Lambertian
    >>> world = HittableList()
    >>> world.add_sphere((0.0, -100.5, -1.0), 100.0, Lambertian((0.8, 0.8, 0.0)))
    0
    >>> glass = Dielectric(1.5)
    >>> world.add_sphere((-1.0, 0.0, -1.0), 0.5, glass)
    1
    >>> world.add_sphere((-1.0, 0.0, -1.0), -0.45, glass)  # hollow shell
    2
    >>> len(world.materials)
    2
    >>> world.commit()
    >>> # Within a Taichi kernel:
    >>> # rec = world.hit(ray, 0.001, 1e30)
"""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import taichi as ti
from loguru import logger

from rtweekend.core.ray import Ray
from rtweekend.geometry.sphere import HitRecord, Sphere, hit_sphere, make_miss_record
from rtweekend.materials.base import DefaultMaterial, Material, MaterialRecord

Point = tuple[float, float, float]


@dataclass(frozen=True)
class SphereInfo:
    """Host-side description of a sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The signed radius of the sphere.
        material: The material object; shared by reference.
    """

    center: Point
    radius: float
    material: Material


@ti.data_oriented
class HittableList:
    """An unordered collection of spheres with a nearest-hit query.

    Insertion order is kept for serialization only; hit() considers every
    member and selects by t.
    """

    def __init__(self, spheres: Iterable[SphereInfo] = ()) -> None:
        self._spheres: list[SphereInfo] = []
        self._materials: list[Material] = []
        self._material_ids: dict[Material, int] = {}
        self._default_material = DefaultMaterial()
        self._committed = False
        self.size = 0
        for sphere in spheres:
            self.add(sphere)

    def __len__(self) -> int:
        return len(self._spheres)

    @property
    def spheres(self) -> tuple[SphereInfo, ...]:
        return tuple(self._spheres)

    @property
    def materials(self) -> tuple[Material, ...]:
        return tuple(self._materials)

    @property
    def committed(self) -> bool:
        return self._committed

    def _check_mutable(self) -> None:
        if self._committed:
            raise RuntimeError("Scene has been committed and is read-only.")

    def material_id(self, material: Material) -> int:
        """Return the table index of a material, registering it if new."""
        idx = self._material_ids.get(material)
        if idx is None:
            self._check_mutable()
            idx = len(self._materials)
            self._materials.append(material)
            self._material_ids[material] = idx
        return idx

    def add(self, sphere: SphereInfo) -> int:
        """Add a sphere to the scene.

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the scene has already been committed.
        """
        self._check_mutable()
        self.material_id(sphere.material)
        self._spheres.append(sphere)
        return len(self._spheres) - 1

    def add_sphere(self, center: Point, radius: float, material: Material | None = None) -> int:
        """Add a sphere from its parameters.

        A sphere without a material gets the absorbing DefaultMaterial.
        """
        if material is None:
            material = self._default_material
        center = (float(center[0]), float(center[1]), float(center[2]))
        return self.add(SphereInfo(center=center, radius=float(radius), material=material))

    def clear(self) -> None:
        """Remove all spheres and materials.

        Raises:
            RuntimeError: If the scene has already been committed.
        """
        self._check_mutable()
        self._spheres.clear()
        self._materials.clear()
        self._material_ids.clear()

    def to_config(self, camera=None):
        """Describe the scene as a SceneConfig with named materials."""
        from rtweekend.scene.config import SceneConfig

        return SceneConfig.from_world(self, camera)

    @classmethod
    def from_config(cls, config) -> "HittableList":
        """Build an uncommitted scene from a SceneConfig."""
        return config.build()

    def commit(self) -> None:
        """Upload the scene to Taichi fields and freeze it.

        Must be called after ti.init() and before any kernel uses hit().
        Committing twice is a no-op.
        """
        if self._committed:
            return

        n = max(len(self._spheres), 1)
        m = max(len(self._materials), 1)

        self.centers = ti.Vector.field(3, dtype=ti.f64, shape=n)
        self.radii = ti.field(dtype=ti.f64, shape=n)
        self.sphere_material_ids = ti.field(dtype=ti.i32, shape=n)

        self.material_kinds = ti.field(dtype=ti.i32, shape=m)
        self.material_albedos = ti.Vector.field(3, dtype=ti.f64, shape=m)
        self.material_fuzz = ti.field(dtype=ti.f64, shape=m)
        self.material_ref_idx = ti.field(dtype=ti.f64, shape=m)

        if self._spheres:
            self.centers.from_numpy(np.array([s.center for s in self._spheres], dtype=np.float64))
            self.radii.from_numpy(np.array([s.radius for s in self._spheres], dtype=np.float64))
            self.sphere_material_ids.from_numpy(
                np.array([self._material_ids[s.material] for s in self._spheres], dtype=np.int32)
            )

        for idx, material in enumerate(self._materials):
            params = material.record_params()
            self.material_kinds[idx] = int(material.kind)
            self.material_albedos[idx] = params["albedo"]
            self.material_fuzz[idx] = params["fuzz"]
            self.material_ref_idx[idx] = params["ref_idx"]

        self.size = len(self._spheres)
        self._committed = True
        logger.debug(
            "Committed scene: {} spheres, {} materials", len(self._spheres), len(self._materials)
        )

    @ti.func
    def sphere(self, i: ti.i32) -> Sphere:
        return Sphere(
            center=self.centers[i],
            radius=self.radii[i],
            material_id=self.sphere_material_ids[i],
        )

    @ti.func
    def material(self, material_id: ti.i32) -> MaterialRecord:
        return MaterialRecord(
            kind=self.material_kinds[material_id],
            albedo=self.material_albedos[material_id],
            fuzz=self.material_fuzz[material_id],
            ref_idx=self.material_ref_idx[material_id],
        )

    @ti.func
    def hit(self, ray: Ray, t_min: ti.f64, t_max: ti.f64) -> HitRecord:
        """Find the nearest intersection over all spheres.

        The upper bound shrinks to the closest t accepted so far, so a
        farther sphere can never replace a nearer hit, whatever the
        insertion order.

        Args:
            ray: The ray to test.
            t_min: Exclusive lower bound on t.
            t_max: Exclusive upper bound on t.

        Returns:
            The HitRecord of the nearest hit, or a miss record.
        """
        closest_t = t_max
        result = make_miss_record()
        for idx in range(self.size):
            rec = hit_sphere(ray, self.sphere(idx), t_min, closest_t)
            if rec.hit == 1:
                closest_t = rec.t
                result = rec
        return result
