"""Tests for the sphere primitive and ray-sphere intersection."""

import math

import numpy as np
import pytest

from pathtracer.core.ray import Ray, vec3
from pathtracer.geometry.sphere import hit_sphere, make_sphere
from pathtracer.materials import lambertian

GRAY = lambertian((0.5, 0.5, 0.5))
T_MAX = math.inf


class TestHitSphere:
    """Test hit_sphere against a unit sphere at z = -3."""

    @pytest.fixture
    def sphere(self):
        return make_sphere((0.0, 0.0, -3.0), 1.0, GRAY)

    def test_head_on_hit_from_outside(self, sphere):
        """Test that a ray toward the center hits the near surface."""
        rec = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), sphere, 0.001, T_MAX)

        assert rec is not None
        assert rec.t == pytest.approx(2.0)
        assert np.allclose(rec.point, [0.0, 0.0, -2.0])
        assert np.allclose(rec.normal, [0.0, 0.0, 1.0])
        assert rec.front_face
        assert rec.material is GRAY

    def test_miss(self, sphere):
        rec = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 1, 0)), sphere, 0.001, T_MAX)
        assert rec is None

    def test_ray_pointing_away_misses(self, sphere):
        rec = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 0, 1)), sphere, 0.001, T_MAX)
        assert rec is None

    def test_hit_from_inside_is_back_face(self, sphere):
        """Test that the normal is flipped to face the ray from inside."""
        rec = hit_sphere(Ray(vec3(0, 0, -3), vec3(0, 0, -1)), sphere, 0.001, T_MAX)

        assert rec is not None
        assert rec.t == pytest.approx(1.0)
        assert not rec.front_face
        assert np.allclose(rec.normal, [0.0, 0.0, 1.0])

    def test_t_max_excludes_far_hits(self, sphere):
        rec = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), sphere, 0.001, 1.5)
        assert rec is None

    def test_t_min_skips_near_root(self, sphere):
        """Test that the far root is used when the near root is below t_min."""
        rec = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), sphere, 2.5, T_MAX)
        assert rec is not None
        assert rec.t == pytest.approx(4.0)

    def test_unnormalized_direction(self, sphere):
        """Test that t scales with the direction length."""
        rec = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 0, -2)), sphere, 0.001, T_MAX)
        assert rec is not None
        assert rec.t == pytest.approx(1.0)
        assert np.allclose(rec.point, [0.0, 0.0, -2.0])

    def test_normal_is_unit_length_off_axis(self, sphere):
        rec = hit_sphere(Ray(vec3(0.3, 0.2, 0), vec3(0, 0, -1)), sphere, 0.001, T_MAX)
        assert rec is not None
        assert np.linalg.norm(rec.normal) == pytest.approx(1.0)
