"""End-to-end tests for the renderer.

Renders are kept tiny (16x8 pixels, a few samples) so that each test
compiles and runs in a few seconds on the CPU backend.
"""

import numpy as np
import pytest


def _make_renderer(seed=0, samples=4, scene="two-spheres", aperture=0.0):
    from dataclasses import replace

    from rtweekend.camera import Camera
    from rtweekend.config import RenderSettings
    from rtweekend.core.renderer import Renderer
    from rtweekend.scene.presets import PRESETS

    settings = RenderSettings(
        image_width=16, aspect_ratio=2.0, samples_per_pixel=samples, max_depth=10, seed=seed
    )
    factory, camera_config = PRESETS[scene]
    camera_config = replace(camera_config, aspect_ratio=settings.aspect_ratio, aperture=aperture)
    return Renderer(factory(), Camera.from_config(camera_config), settings)


class TestRenderer:
    """Tests for Renderer.render() and Renderer.image()."""

    def test_output_shape(self):
        renderer = _make_renderer()
        sums = renderer.render()
        assert sums.shape == (8, 16, 3)
        assert sums.dtype == np.float64
        pixels = renderer.image()
        assert pixels.shape == (8, 16, 3)
        assert pixels.dtype == np.uint8

    def test_same_seed_same_image(self):
        first = _make_renderer(seed=7).render()
        second = _make_renderer(seed=7).render()
        assert np.array_equal(first, second)

    def test_different_seed_different_image(self):
        first = _make_renderer(seed=1).render()
        second = _make_renderer(seed=2).render()
        assert not np.array_equal(first, second)

    def test_rows_rendered_top_to_bottom(self):
        renderer = _make_renderer(samples=1)
        rows = []
        renderer.render(callback=rows.append)
        assert rows == list(range(7, -1, -1))

    def test_image_orientation_and_tint(self):
        """Test the sky is at the top and the red sphere at the center."""
        renderer = _make_renderer(samples=8)
        renderer.render()
        pixels = renderer.image().astype(int)

        # Top row: sky, blue channel saturated and red below it
        assert np.all(pixels[0, :, 2] == 255)
        assert np.all(pixels[0, :, 0] < pixels[0, :, 2])

        # Center: the reddish diffuse sphere
        r, g, b = pixels[4, 7]
        assert r > g
        assert r > b

        # Bottom row: yellow ground, no blue after a bounce off it
        bottom = renderer.sums()[7]
        assert np.all(bottom[:, 2] < bottom[:, 0])

    def test_sums_before_render_rejected(self):
        renderer = _make_renderer()
        with pytest.raises(RuntimeError, match="render"):
            renderer.image()

    def test_showcase_with_lens(self):
        renderer = _make_renderer(scene="showcase", samples=2, aperture=0.1)
        sums = renderer.render()
        assert np.all(np.isfinite(sums))
        assert np.all(sums >= 0.0)
        assert sums.mean() > 0.0

    def test_render_commits_world(self):
        renderer = _make_renderer()
        assert renderer.world.committed

    def test_sixteen_by_nine_ppm_is_reproducible(self):
        """Test two seeded 16x9 renders give byte-identical PPM output."""
        import io

        from rtweekend.camera import Camera
        from rtweekend.config import RenderSettings
        from rtweekend.core.renderer import Renderer
        from rtweekend.output.ppm import write_ppm
        from rtweekend.scene.presets import TWO_SPHERE_CAMERA, two_sphere_scene

        settings = RenderSettings(image_width=16, samples_per_pixel=4, max_depth=10, seed=3)
        assert settings.image_height == 9

        outputs = []
        for _ in range(2):
            renderer = Renderer(two_sphere_scene(), Camera.from_config(TWO_SPHERE_CAMERA), settings)
            renderer.render()
            stream = io.StringIO()
            write_ppm(stream, renderer.image())
            outputs.append(stream.getvalue())

        assert outputs[0] == outputs[1]
        assert outputs[0].startswith("P3\n16 9\n255\n")

        pixels = renderer.image().astype(int)
        r, g, b = pixels[4, 7]
        assert r > g
        assert r > b
