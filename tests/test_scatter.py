"""Tests for material dispatch and material descriptions."""

import pytest
import taichi as ti


def _run_scatter(kind, albedo=(0.5, 0.5, 0.5), fuzz=0.0, ref_idx=1.5):
    """Scatter a ray hitting the top of a surface with the given material."""
    from rtweekend.core.ray import make_ray, vec3
    from rtweekend.core.sampler import seed_rng
    from rtweekend.geometry.sphere import HitRecord
    from rtweekend.materials import MaterialRecord, scatter

    direction_out = ti.Vector.field(3, dtype=ti.f64, shape=())
    attenuation_out = ti.Vector.field(3, dtype=ti.f64, shape=())
    scattered = ti.field(dtype=ti.i32, shape=())
    ar, ag, ab = albedo

    @ti.kernel
    def test_kernel():
        for k in range(1):
            material = MaterialRecord(
                kind=kind,
                albedo=vec3(ar, ag, ab),
                fuzz=fuzz,
                ref_idx=ref_idx,
            )
            ray_in = make_ray(vec3(-1.0, 1.0, 0.0), vec3(1.0, -1.0, 0.0))
            rec = HitRecord(
                hit=1,
                t=1.0,
                point=vec3(0.0, 0.0, 0.0),
                normal=vec3(0.0, 1.0, 0.0),
                front_face=1,
                material_id=0,
            )
            rng = seed_rng(ti.u32(0), k, 0)
            direction, attenuation, did_scatter, rng = scatter(material, ray_in, rec, rng)
            direction_out[None] = direction
            attenuation_out[None] = attenuation
            scattered[None] = did_scatter

    test_kernel()
    d = direction_out[None]
    a = attenuation_out[None]
    return (d[0], d[1], d[2]), (a[0], a[1], a[2]), scattered[None]


class TestScatterDispatch:
    """Tests for the scatter dispatcher."""

    def test_default_material_absorbs(self):
        from rtweekend.materials import MaterialKind

        _, _, did_scatter = _run_scatter(int(MaterialKind.DEFAULT))
        assert did_scatter == 0

    def test_lambertian_dispatch(self):
        from rtweekend.materials import MaterialKind

        _, attenuation, did_scatter = _run_scatter(
            int(MaterialKind.LAMBERTIAN), albedo=(0.7, 0.3, 0.3)
        )
        assert did_scatter == 1
        assert attenuation == pytest.approx((0.7, 0.3, 0.3))

    def test_metal_dispatch(self):
        from rtweekend.materials import MaterialKind

        direction, attenuation, did_scatter = _run_scatter(
            int(MaterialKind.METAL), albedo=(0.8, 0.6, 0.2)
        )
        h = 0.5**0.5
        assert did_scatter == 1
        assert direction == pytest.approx((h, h, 0.0))
        assert attenuation == pytest.approx((0.8, 0.6, 0.2))

    def test_dielectric_dispatch(self):
        from rtweekend.materials import MaterialKind

        _, attenuation, did_scatter = _run_scatter(int(MaterialKind.DIELECTRIC), ref_idx=1.5)
        assert did_scatter == 1
        assert attenuation == pytest.approx((1.0, 1.0, 1.0))


class TestMaterialFromDict:
    """Tests for building materials from descriptions."""

    @pytest.mark.parametrize(
        "data",
        [
            {"type": "lambertian", "albedo": [0.7, 0.3, 0.3]},
            {"type": "metal", "albedo": [0.8, 0.6, 0.2], "fuzz": 0.3},
            {"type": "dielectric", "ref_idx": 1.5},
            {"type": "default"},
        ],
    )
    def test_description_round_trip(self, data):
        from rtweekend.materials import material_from_dict

        assert material_from_dict(data).to_dict() == data

    def test_metal_fuzz_defaults_to_zero(self):
        from rtweekend.materials import Metal, material_from_dict

        material = material_from_dict({"type": "metal", "albedo": [0.8, 0.8, 0.8]})
        assert isinstance(material, Metal)
        assert material.fuzz == 0.0

    def test_unknown_type_rejected(self):
        from rtweekend.materials import material_from_dict

        with pytest.raises(ValueError, match="Unknown material type: velvet"):
            material_from_dict({"type": "velvet"})

    def test_invalid_parameters_rejected(self):
        from rtweekend.materials import material_from_dict

        with pytest.raises(ValueError):
            material_from_dict({"type": "dielectric", "ref_idx": -1.0})
