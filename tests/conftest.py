"""Pytest configuration for path tracer tests.

Shared fixtures: seeded random generators, a square pinhole camera looking
down -z, and small scenes used across test modules.
"""

import numpy as np
import pytest

from pathtracer.camera.pinhole import PinholeCamera, setup_camera
from pathtracer.geometry.sphere import make_sphere
from pathtracer.materials import lambertian
from pathtracer.scene.intersection import Scene

# Albedo of the sphere in the covering_scene fixture
COVER_ALBEDO = (0.8, 0.6, 0.4)


@pytest.fixture
def rng():
    """A seeded generator so that sampling tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def square_camera():
    """Camera state at the origin looking down -z, 90 degree FOV, aspect 1."""
    camera = PinholeCamera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=1.0,
    )
    return setup_camera(camera)


@pytest.fixture
def empty_scene():
    """A scene with no primitives: every ray escapes to the sky."""
    return Scene()


@pytest.fixture
def covering_scene():
    """One large Lambertian sphere in front of the camera.

    Seen from the origin it subtends about 87 degrees off the view axis, so
    it covers the whole viewport of the square_camera fixture, including
    the jitter overshoot of the last column and row.
    """
    return Scene.of(make_sphere((0.0, 0.0, -10.0), 9.99, lambertian(COVER_ALBEDO)))
