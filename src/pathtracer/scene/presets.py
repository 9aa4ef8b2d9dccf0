"""Ready-made scenes with matching cameras.

- create_default_scene(): the four-sphere scene (ground, diffuse center,
  mirror on the left, glass on the right) seen from the origin.
- create_random_scene(): a ground plane covered in small randomly placed
  spheres with three large feature spheres, seen through a thin lens.

Example:
    >>> from pathtracer.scene.presets import create_default_scene
    >>> from pathtracer.camera.pinhole import setup_camera
    >>>
    >>> scene, camera = create_default_scene(aspect_ratio=16.0 / 9.0)
    >>> state = setup_camera(camera)
"""

from __future__ import annotations

import numpy as np

from pathtracer.camera.pinhole import PinholeCamera
from pathtracer.core.ray import length, vec3
from pathtracer.geometry.sphere import make_sphere
from pathtracer.materials import dielectric, lambertian, metal
from pathtracer.scene.intersection import Scene

# =============================================================================
# Default Scene Constants
# =============================================================================

GROUND_ALBEDO = (0.6, 0.8, 0.0)
CENTER_ALBEDO = (0.7, 0.3, 0.3)
LEFT_METAL_ALBEDO = (0.8, 0.8, 0.8)
LEFT_METAL_FUZZ = 0.0
GLASS_IOR = 1.5

# =============================================================================
# Random Scene Constants
# =============================================================================

RANDOM_GRID_EXTENT = 11
RANDOM_GROUND_ALBEDO = (0.5, 0.5, 0.5)
SMALL_SPHERE_RADIUS = 0.2


def create_default_scene(aspect_ratio: float = 16.0 / 9.0) -> tuple[Scene, PinholeCamera]:
    """Create the four-sphere scene and its camera.

    The camera sits at the origin looking down -z with a 90 degree vertical
    field of view, which gives a viewport of height 2 at focal length 1.

    Args:
        aspect_ratio: Width divided by height of the output image.

    Returns:
        Tuple of (scene, camera configuration).
    """
    scene = Scene.of(
        make_sphere((0.0, -100.5, -1.0), 100.0, lambertian(GROUND_ALBEDO)),
        make_sphere((0.0, 0.0, -1.0), 0.5, lambertian(CENTER_ALBEDO)),
        make_sphere((-1.0, 0.0, -1.0), 0.5, metal(LEFT_METAL_ALBEDO, LEFT_METAL_FUZZ)),
        make_sphere((1.0, 0.0, -1.0), 0.5, dielectric(GLASS_IOR)),
    )
    camera = PinholeCamera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=aspect_ratio,
    )
    return scene, camera


def create_random_scene(
    rng: np.random.Generator,
    aspect_ratio: float = 3.0 / 2.0,
    grid_extent: int = RANDOM_GRID_EXTENT,
) -> tuple[Scene, PinholeCamera]:
    """Create a randomized field of small spheres and its camera.

    Each grid cell in [-grid_extent, grid_extent)^2 gets one small sphere
    jittered within the cell: 80% diffuse, 15% fuzzy metal, 5% glass.
    Cells too close to the large metal sphere are left empty.

    Args:
        rng: Generator used for placement and material choice.
        aspect_ratio: Width divided by height of the output image.
        grid_extent: Half-width of the sphere grid in cells.

    Returns:
        Tuple of (scene, camera configuration).
    """
    spheres = [make_sphere((0.0, -1000.0, 0.0), 1000.0, lambertian(RANDOM_GROUND_ALBEDO))]
    keep_clear = vec3(4.0, SMALL_SPHERE_RADIUS, 0.0)

    for a in range(-grid_extent, grid_extent):
        for b in range(-grid_extent, grid_extent):
            choose_mat = rng.random()
            center = vec3(a + 0.9 * rng.random(), SMALL_SPHERE_RADIUS, b + 0.9 * rng.random())

            if length(center - keep_clear) <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = rng.random(3) * rng.random(3)
                material = lambertian(tuple(albedo))
            elif choose_mat < 0.95:
                albedo = rng.uniform(0.5, 1.0, 3)
                material = metal(tuple(albedo), rng.uniform(0.0, 0.5))
            else:
                material = dielectric(GLASS_IOR)

            spheres.append(make_sphere(tuple(center), SMALL_SPHERE_RADIUS, material))

    spheres.append(make_sphere((0.0, 1.0, 0.0), 1.0, dielectric(GLASS_IOR)))
    spheres.append(make_sphere((-4.0, 1.0, 0.0), 1.0, lambertian((0.4, 0.2, 0.1))))
    spheres.append(make_sphere((4.0, 1.0, 0.0), 1.0, metal((0.7, 0.6, 0.5), 0.0)))

    camera = PinholeCamera(
        lookfrom=(13.0, 2.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0,
    )
    return Scene(tuple(spheres)), camera
