"""Tests for the path tracing integrator (per-pixel sampler).

Covers the sky gradient, depth cutoff, material dispatch and the
determinism of seeded sampling, plus the two exact end-to-end scenarios:
an empty scene (pure miss path) and a viewport-filling diffuse sphere
(one permitted bounce).
"""

import numpy as np
import pytest

from pathtracer.camera.pinhole import get_ray
from pathtracer.core.integrator import (
    background_color,
    pixel_rng,
    ray_color,
    sample_pixel,
    scatter_material,
)
from pathtracer.core.ray import Ray, vec3
from pathtracer.geometry.sphere import HitRecord
from pathtracer.materials import Material, MaterialType, dielectric, lambertian
from pathtracer.scene.presets import create_default_scene


class TestBackgroundColor:
    """Test the sky gradient."""

    def test_straight_up_is_sky_blue(self):
        assert np.allclose(background_color(vec3(0.0, 1.0, 0.0)), [0.5, 0.7, 1.0])

    def test_straight_down_is_white(self):
        assert np.allclose(background_color(vec3(0.0, -1.0, 0.0)), [1.0, 1.0, 1.0])

    def test_horizontal_is_halfway(self):
        assert np.allclose(background_color(vec3(1.0, 0.0, 0.0)), [0.75, 0.85, 1.0])

    def test_direction_length_does_not_matter(self):
        assert np.allclose(
            background_color(vec3(0.0, 3.0, 4.0)), background_color(vec3(0.0, 0.6, 0.8))
        )


class TestRayColor:
    """Test recursive tracing."""

    def test_zero_depth_is_black(self, empty_scene, rng):
        ray = Ray(vec3(0, 0, 0), vec3(0, 1, 0))
        assert np.array_equal(ray_color(ray, empty_scene, 0, rng), [0.0, 0.0, 0.0])

    def test_negative_depth_is_black(self, empty_scene, rng):
        ray = Ray(vec3(0, 0, 0), vec3(0, 1, 0))
        assert np.array_equal(ray_color(ray, empty_scene, -3, rng), [0.0, 0.0, 0.0])

    def test_miss_returns_sky(self, empty_scene, rng):
        ray = Ray(vec3(0, 0, 0), vec3(0.3, 0.4, -1.0))
        assert np.allclose(ray_color(ray, empty_scene, 50, rng), background_color(ray.direction))

    def test_single_bounce_cutoff_is_black(self, covering_scene, rng):
        """Test that with depth 1 the scattered ray gets no budget."""
        ray = Ray(vec3(0, 0, 0), vec3(0, 0, -1))
        assert np.array_equal(ray_color(ray, covering_scene, 1, rng), [0.0, 0.0, 0.0])

    def test_one_bounce_is_albedo_times_sky(self, covering_scene, rng):
        """Test that one diffuse bounce returns albedo * sky gradient."""
        ray = Ray(vec3(0, 0, 0), vec3(0, 0, -1))
        for _ in range(20):
            color = ray_color(ray, covering_scene, 2, rng)
            _assert_albedo_times_sky(color, covering_scene.spheres[0].material.albedo)


class TestScatterMaterial:
    """Test material dispatch."""

    def _record(self, material):
        return HitRecord(
            t=1.0,
            point=vec3(0, 0, 0),
            normal=vec3(0, 1, 0),
            front_face=True,
            material=material,
        )

    def test_dispatches_lambertian(self, rng):
        mat = lambertian((0.1, 0.2, 0.3))
        result = scatter_material(Ray(vec3(0, 1, 0), vec3(0, -1, 0)), self._record(mat), rng)
        assert np.allclose(result.attenuation, [0.1, 0.2, 0.3])

    def test_dispatches_dielectric(self, rng):
        mat = dielectric(1.5)
        result = scatter_material(Ray(vec3(0, 1, 0), vec3(0, -1, 0)), self._record(mat), rng)
        assert np.allclose(result.attenuation, [1.0, 1.0, 1.0])

    def test_unknown_type_rejected(self, rng):
        bogus = Material(material_type=7, albedo=vec3(0, 0, 0))
        with pytest.raises(ValueError, match="Unknown material type"):
            scatter_material(Ray(vec3(0, 1, 0), vec3(0, -1, 0)), self._record(bogus), rng)


class TestSamplePixel:
    """Test per-pixel sampling."""

    def test_same_stream_same_result(self, square_camera):
        """Test determinism under an identically seeded stream."""
        scene, _ = create_default_scene(aspect_ratio=1.0)
        args = (3, 2, scene, square_camera, 6, 6, 4, 10)

        first = sample_pixel(*args, pixel_rng(99, 3, 2))
        second = sample_pixel(*args, pixel_rng(99, 3, 2))

        assert np.array_equal(first, second)

    def test_pixel_streams_are_independent(self):
        a = pixel_rng(1, 0, 0).random(4)
        b = pixel_rng(1, 1, 0).random(4)
        c = pixel_rng(1, 0, 1).random(4)
        assert not np.array_equal(a, b)
        assert not np.array_equal(a, c)
        assert not np.array_equal(b, c)

    def test_returns_unnormalized_sum(self, empty_scene, square_camera):
        """Test that N sky samples sum to roughly N times a sky color."""
        total = sample_pixel(0, 0, empty_scene, square_camera, 2, 2, 8, 50, pixel_rng(5, 0, 0))
        # The blue channel of the sky gradient is exactly 1.0
        assert total[2] == pytest.approx(8.0)

    def test_empty_scene_matches_sky_exactly(self, empty_scene, square_camera):
        """Test the miss path against the gradient at the jittered ray."""
        for column, row in [(0, 0), (1, 0), (0, 1), (1, 1)]:
            color = sample_pixel(
                column, row, empty_scene, square_camera, 2, 2, 1, 50, pixel_rng(8, column, row)
            )

            replay = pixel_rng(8, column, row)
            u = (column + replay.random()) / 1
            v = (row + replay.random()) / 1
            ray = get_ray(square_camera, u, v, replay)

            assert np.allclose(color, background_color(ray.direction))

    def test_covering_sphere_depth_one_is_black(self, covering_scene, square_camera):
        for column, row in [(0, 0), (1, 0), (0, 1), (1, 1)]:
            color = sample_pixel(
                column, row, covering_scene, square_camera, 2, 2, 1, 1, pixel_rng(4, column, row)
            )
            assert np.array_equal(color, [0.0, 0.0, 0.0])

    def test_covering_sphere_one_bounce(self, covering_scene, square_camera):
        for column, row in [(0, 0), (1, 0), (0, 1), (1, 1)]:
            color = sample_pixel(
                column, row, covering_scene, square_camera, 2, 2, 1, 2, pixel_rng(4, column, row)
            )
            _assert_albedo_times_sky(color, covering_scene.spheres[0].material.albedo)


def _assert_albedo_times_sky(color, albedo):
    """Check color == albedo * ((1 - t) * white + t * sky_blue) for some t in [0, 1]."""
    r, g, b = (c / a for c, a in zip(color, albedo))
    assert b == pytest.approx(1.0)
    t = (1.0 - r) / 0.5
    assert -1e-9 <= t <= 1.0 + 1e-9
    assert g == pytest.approx(1.0 - 0.3 * t)


def test_material_types_are_closed():
    assert [m.name for m in MaterialType] == ["LAMBERTIAN", "METAL", "DIELECTRIC"]
