"""Tests for the Lambertian material."""

import numpy as np
import pytest

from pathtracer.core.ray import dot, vec3
from pathtracer.geometry.sphere import HitRecord
from pathtracer.materials import MaterialType, lambertian, scatter_lambertian


def _record(material, normal=(0.0, 1.0, 0.0)):
    return HitRecord(
        t=1.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(*normal),
        front_face=True,
        material=material,
    )


class TestLambertianMaterial:
    """Test material construction."""

    def test_constructor_sets_type_and_albedo(self):
        mat = lambertian((0.2, 0.4, 0.6))
        assert mat.material_type is MaterialType.LAMBERTIAN
        assert np.allclose(mat.albedo, [0.2, 0.4, 0.6])

    @pytest.mark.parametrize("albedo", [(1.1, 0.5, 0.5), (0.5, -0.1, 0.5)])
    def test_rejects_albedo_outside_unit_range(self, albedo):
        with pytest.raises(ValueError, match="energy conservation"):
            lambertian(albedo)


class TestScatterLambertian:
    """Test diffuse scattering."""

    def test_always_scatters_with_albedo_attenuation(self, rng):
        mat = lambertian((0.7, 0.3, 0.3))
        for _ in range(50):
            result = scatter_lambertian(mat, _record(mat), rng)
            assert result is not None
            assert np.allclose(result.attenuation, [0.7, 0.3, 0.3])

    def test_scattered_ray_starts_at_hit_point_above_surface(self, rng):
        mat = lambertian((0.5, 0.5, 0.5))
        rec = _record(mat)
        for _ in range(100):
            result = scatter_lambertian(mat, rec, rng)
            assert np.allclose(result.scattered.origin, rec.point)
            assert dot(result.scattered.direction, rec.normal) >= 0.0

    def test_degenerate_direction_falls_back_to_normal(self):
        """Test that a random vector cancelling the normal yields the normal."""

        class OppositeNormalRng:
            # random_in_unit_sphere draws this point, which normalizes to -y
            def uniform(self, low, high, size):
                return np.array([0.0, -0.5, 0.0])

        mat = lambertian((0.5, 0.5, 0.5))
        result = scatter_lambertian(mat, _record(mat), OppositeNormalRng())
        assert np.allclose(result.scattered.direction, [0.0, 1.0, 0.0])
