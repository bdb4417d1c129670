"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Tangent rays (never a hit)
- Negative radius (inward-facing normals)
- The (t_min, t_max) interval
"""

import pytest
import taichi as ti


def _hit_fields():
    return {
        "hit": ti.field(dtype=ti.i32, shape=()),
        "t": ti.field(dtype=ti.f64, shape=()),
        "point": ti.Vector.field(3, dtype=ti.f64, shape=()),
        "normal": ti.Vector.field(3, dtype=ti.f64, shape=()),
        "front_face": ti.field(dtype=ti.i32, shape=()),
        "material_id": ti.field(dtype=ti.i32, shape=()),
    }


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_direct_hit(self):
        """Test ray hitting sphere head-on from outside."""
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        out = _hit_fields()
        hit, t_val, point, normal, front_face, material_id = out.values()

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0, material_id=3)
            record = hit_sphere(ray, sphere, 0.001, 1000.0)
            hit[None] = record.hit
            t_val[None] = record.t
            point[None] = record.point
            normal[None] = record.normal
            front_face[None] = record.front_face
            material_id[None] = record.material_id

        test_kernel()
        assert hit[None] == 1
        # Front of the sphere at z=1, so t=4
        assert t_val[None] == pytest.approx(4.0)
        p = point[None]
        assert (p[0], p[1], p[2]) == pytest.approx((0.0, 0.0, 1.0))
        n = normal[None]
        assert (n[0], n[1], n[2]) == pytest.approx((0.0, 0.0, 1.0))
        assert front_face[None] == 1
        assert material_id[None] == 3

    def test_hit_sphere_unnormalized_direction(self):
        """Test t is measured in units of the given direction."""
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        t_val = ti.field(dtype=ti.f64, shape=())
        normal = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -2.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0, material_id=0)
            record = hit_sphere(ray, sphere, 0.001, 1000.0)
            t_val[None] = record.t
            normal[None] = record.normal

        test_kernel()
        assert t_val[None] == pytest.approx(2.0)
        n = normal[None]
        assert n[0] ** 2 + n[1] ** 2 + n[2] ** 2 == pytest.approx(1.0)

    def test_hit_sphere_miss(self):
        """Test ray missing sphere entirely."""
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(5.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0, material_id=0)
            hit[None] = hit_sphere(ray, sphere, 0.001, 1000.0).hit

        test_kernel()
        assert hit[None] == 0

    def test_hit_sphere_inside(self):
        """Test ray starting inside sphere (back face hit)."""
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        out = _hit_fields()
        hit, t_val, _, normal, front_face, _ = out.values()

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0, material_id=0)
            record = hit_sphere(ray, sphere, 0.001, 1000.0)
            hit[None] = record.hit
            t_val[None] = record.t
            normal[None] = record.normal
            front_face[None] = record.front_face

        test_kernel()
        assert hit[None] == 1
        assert t_val[None] == pytest.approx(1.0)
        # Normal faces the incoming ray, opposite to the outward normal
        n = normal[None]
        assert (n[0], n[1], n[2]) == pytest.approx((0.0, 0.0, -1.0))
        assert front_face[None] == 0

    def test_hit_sphere_tangent_is_miss(self):
        """Test a ray grazing the sphere (zero discriminant) does not hit."""
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 0.0, -5.0), vec3(0.0, 0.0, 1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0, material_id=0)
            hit[None] = hit_sphere(ray, sphere, 0.001, 1000.0).hit

        test_kernel()
        assert hit[None] == 0

    def test_negative_radius_flips_normal(self):
        """Test a negative radius makes the outside count as the back face."""
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        out = _hit_fields()
        hit, t_val, _, normal, front_face, _ = out.values()

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=-0.5, material_id=0)
            record = hit_sphere(ray, sphere, 0.001, 1000.0)
            hit[None] = record.hit
            t_val[None] = record.t
            normal[None] = record.normal
            front_face[None] = record.front_face

        test_kernel()
        assert hit[None] == 1
        assert t_val[None] == pytest.approx(4.5)
        # Outward normal points toward the center; the reported normal
        # still faces the incoming ray
        n = normal[None]
        assert (n[0], n[1], n[2]) == pytest.approx((0.0, 0.0, 1.0))
        assert front_face[None] == 0

    def test_hit_sphere_t_min_skips_to_far_root(self):
        """Test that a root at or below t_min falls through to the far root."""
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 1.005), vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0, material_id=0)
            record = hit_sphere(ray, sphere, 0.01, 1000.0)
            hit[None] = record.hit
            t_val[None] = record.t

        test_kernel()
        assert hit[None] == 1
        assert t_val[None] == pytest.approx(2.005)

    def test_hit_sphere_t_max_rejects(self):
        """Test that hits beyond t_max are rejected."""
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 100.0), vec3(0.0, 0.0, -1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0, material_id=0)
            hit[None] = hit_sphere(ray, sphere, 0.001, 50.0).hit

        test_kernel()
        assert hit[None] == 0

    def test_sphere_behind_ray_is_miss(self):
        from rtweekend.core.ray import make_ray, vec3
        from rtweekend.geometry.sphere import Sphere, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, 1.0))
            sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=1.0, material_id=0)
            hit[None] = hit_sphere(ray, sphere, 0.001, 1000.0).hit

        test_kernel()
        assert hit[None] == 0
