"""Positionable camera with optional depth of field.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from look_at toward look_from (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The image plane sits focus_dist along -w. With aperture = 0 and
focus_dist = 1 this is a pinhole camera; a positive aperture jitters ray
origins over a lens disk of radius aperture / 2, which keeps only the focus
plane sharp.

The basis is computed once on the host with NumPy and stored in 0-d Taichi
fields; the camera has no setters.

Example:
    >>> from rtweekend.camera.camera import Camera
    >>> camera = Camera(
    ...     look_from=(-2.0, 2.0, 1.0),
    ...     look_at=(0.0, 0.0, -1.0),
    ...     view_up=(0.0, 1.0, 0.0),
    ...     vfov=90.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> # Within a Taichi kernel:
    >>> # ray = camera.get_ray(0.5, 0.5, vec3(0.0, 0.0, 0.0))
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti

from rtweekend.core.ray import Ray, make_ray, vec3

Vector = tuple[float, float, float]


@dataclass(frozen=True)
class CameraConfig:
    """Configuration for a camera.

    Attributes:
        look_from: Camera position in world space.
        look_at: Point the camera is looking at.
        view_up: Up direction used to orient the camera.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the image plane.
        aperture: Lens diameter; 0 gives a pinhole camera.
        focus_dist: Distance from look_from to the plane in focus.
    """

    look_from: Vector = (0.0, 0.0, 0.0)
    look_at: Vector = (0.0, 0.0, -1.0)
    view_up: Vector = (0.0, 1.0, 0.0)
    vfov: float = 90.0
    aspect_ratio: float = 16.0 / 9.0
    aperture: float = 0.0
    focus_dist: float = 1.0


@ti.data_oriented
class Camera:
    """Maps normalized image coordinates (s, t) in [0, 1]^2 to world rays.

    s = 0 is the left edge, t = 0 the bottom edge of the image plane.
    """

    def __init__(
        self,
        look_from: Vector,
        look_at: Vector,
        view_up: Vector,
        vfov: float,
        aspect_ratio: float,
        aperture: float = 0.0,
        focus_dist: float = 1.0,
    ) -> None:
        self.config = CameraConfig(
            look_from=tuple(float(x) for x in look_from),
            look_at=tuple(float(x) for x in look_at),
            view_up=tuple(float(x) for x in view_up),
            vfov=float(vfov),
            aspect_ratio=float(aspect_ratio),
            aperture=float(aperture),
            focus_dist=float(focus_dist),
        )

        theta = math.radians(vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        origin = np.array(look_from, dtype=np.float64)
        target = np.array(look_at, dtype=np.float64)
        vup = np.array(view_up, dtype=np.float64)

        # Degenerate inputs (look_from == look_at, vup parallel to the view
        # direction) produce non-finite vectors here, as with any
        # zero-length normalization.
        with np.errstate(divide="ignore", invalid="ignore"):
            w = origin - target
            w = w / np.linalg.norm(w)
            u = np.cross(vup, w)
            u = u / np.linalg.norm(u)
        v = np.cross(w, u)

        horizontal = focus_dist * viewport_width * u
        vertical = focus_dist * viewport_height * v
        lower_left = origin - horizontal / 2.0 - vertical / 2.0 - focus_dist * w

        self.lens_radius = float(aperture) / 2.0

        self._origin = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._u = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._v = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._w = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._horizontal = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._vertical = ti.Vector.field(3, dtype=ti.f64, shape=())
        self._lower_left_corner = ti.Vector.field(3, dtype=ti.f64, shape=())

        self._origin[None] = origin.tolist()
        self._u[None] = u.tolist()
        self._v[None] = v.tolist()
        self._w[None] = w.tolist()
        self._horizontal[None] = horizontal.tolist()
        self._vertical[None] = vertical.tolist()
        self._lower_left_corner[None] = lower_left.tolist()

    @classmethod
    def from_config(cls, config: CameraConfig) -> "Camera":
        return cls(
            look_from=config.look_from,
            look_at=config.look_at,
            view_up=config.view_up,
            vfov=config.vfov,
            aspect_ratio=config.aspect_ratio,
            aperture=config.aperture,
            focus_dist=config.focus_dist,
        )

    @property
    def has_lens(self) -> bool:
        return self.lens_radius > 0.0

    @ti.func
    def get_ray(self, s: ti.f64, t: ti.f64, disk: vec3) -> Ray:
        """Generate the ray through image-plane coordinates (s, t).

        Args:
            s: Horizontal coordinate (0 = left edge, 1 = right edge).
            t: Vertical coordinate (0 = bottom edge, 1 = top edge).
            disk: A point in the unit disk (z = 0) selecting where on the
                lens the ray starts. Ignored by pinhole cameras.

        Returns:
            A ray from the (jittered) camera origin toward
            lower_left + s * horizontal + t * vertical. The direction is not
            normalized.
        """
        offset = vec3(0.0, 0.0, 0.0)
        if ti.static(self.lens_radius > 0.0):
            rd = self.lens_radius * disk
            offset = self._u[None] * rd.x + self._v[None] * rd.y

        origin = self._origin[None] + offset
        target = (
            self._lower_left_corner[None]
            + s * self._horizontal[None]
            + t * self._vertical[None]
        )
        return make_ray(origin, target - origin)

    def basis(self) -> dict[str, tuple[float, float, float]]:
        """Get the camera vectors for inspection.

        Returns:
            Dictionary with origin, u, v, w, horizontal, vertical and
            lower_left as (x, y, z) tuples.
        """
        fields = {
            "origin": self._origin,
            "u": self._u,
            "v": self._v,
            "w": self._w,
            "horizontal": self._horizontal,
            "vertical": self._vertical,
            "lower_left": self._lower_left_corner,
        }
        result = {}
        for name, value_field in fields.items():
            value = value_field[None]
            result[name] = (float(value[0]), float(value[1]), float(value[2]))
        return result
