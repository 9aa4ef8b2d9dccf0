"""Path tracing integrator for Monte Carlo light transport.

This module implements the per-pixel sampler: for each sample a jittered
camera ray is traced recursively through the scene, bouncing off surfaces
according to their material, until it escapes to the sky gradient, is
absorbed, or runs out of depth.

The sampler is a pure function of its arguments. It reads the scene and
camera, writes nothing shared, and draws all randomness from the generator
passed in, so any number of worker threads can call it at once.

Key features:
    - Material dispatch (Lambertian, Metal, Dielectric)
    - Depth-bounded recursion (depth <= 0 contributes black)
    - Sky gradient environment for escaped rays
    - Per-pixel random streams derived from (seed, row, column)

Example:
    >>> from pathtracer.camera.pinhole import setup_camera
    >>> from pathtracer.core.integrator import pixel_rng, sample_pixel
    >>> from pathtracer.scene.presets import create_default_scene
    >>>
    >>> scene, camera = create_default_scene(aspect_ratio=2.0)
    >>> state = setup_camera(camera)
    >>> raw = sample_pixel(10, 5, scene, state, 40, 20, 8, 50, pixel_rng(1234, 10, 5))
"""

from __future__ import annotations

import numpy as np

from pathtracer.camera.pinhole import CameraState, get_ray
from pathtracer.core.ray import Ray, Vec3, normalize, vec3
from pathtracer.geometry.sphere import HitRecord
from pathtracer.materials import (
    MaterialType,
    ScatterResult,
    scatter_dielectric,
    scatter_lambertian,
    scatter_metal,
)
from pathtracer.scene.intersection import Scene, intersect_scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# t_min and t_max for ray intersection; t_min avoids self-intersection
T_MIN = 0.001
T_MAX = float("inf")

# Sky gradient endpoints
SKY_HORIZON_COLOR = (1.0, 1.0, 1.0)
SKY_ZENITH_COLOR = (0.5, 0.7, 1.0)

BLACK = (0.0, 0.0, 0.0)


# =============================================================================
# Random Streams
# =============================================================================


def pixel_rng(seed: int, column: int, row: int) -> np.random.Generator:
    """Create the independent random generator for one pixel.

    The stream depends only on (seed, row, column), so a seeded render is
    reproducible no matter which worker computes which pixel.
    """
    return np.random.default_rng(np.random.SeedSequence([seed, row, column]))


# =============================================================================
# Path Tracing Core
# =============================================================================


def background_color(direction: Vec3) -> Vec3:
    """Sky gradient for rays that escape the scene.

    Linear blend from white at y = -1 to sky blue at y = +1 over the
    normalized direction's y component.
    """
    t = 0.5 * (normalize(direction)[1] + 1.0)
    return (1.0 - t) * vec3(*SKY_HORIZON_COLOR) + t * vec3(*SKY_ZENITH_COLOR)


def scatter_material(
    ray: Ray, record: HitRecord, rng: np.random.Generator
) -> ScatterResult | None:
    """Dispatch to the scattering function for the hit material.

    Returns:
        The ScatterResult, or None if the ray was absorbed.
    """
    material = record.material
    mat_type = material.material_type

    if mat_type == MaterialType.LAMBERTIAN:
        return scatter_lambertian(material, record, rng)
    if mat_type == MaterialType.METAL:
        return scatter_metal(material, ray, record, rng)
    if mat_type == MaterialType.DIELECTRIC:
        return scatter_dielectric(material, ray, record, rng)
    raise ValueError(f"Unknown material type: {mat_type!r}")


def ray_color(ray: Ray, scene: Scene, depth: int, rng: np.random.Generator) -> Vec3:
    """Trace one ray and return the radiance it carries back.

    Args:
        ray: The ray to trace.
        scene: The scene to trace against.
        depth: Remaining bounces. At depth <= 0 the path contributes black.
        rng: The calling task's random generator.

    Returns:
        The RGB radiance along the ray.
    """
    if depth <= 0:
        return vec3(*BLACK)

    record = intersect_scene(scene, ray, T_MIN, T_MAX)
    if record is None:
        return background_color(ray.direction)

    result = scatter_material(ray, record, rng)
    if result is None:
        return vec3(*BLACK)

    # Componentwise product with the radiance of the scattered ray
    return result.attenuation * ray_color(result.scattered, scene, depth - 1, rng)


def sample_pixel(
    column: int,
    row: int,
    scene: Scene,
    camera: CameraState,
    width: int,
    height: int,
    samples: int,
    max_depth: int,
    rng: np.random.Generator,
) -> Vec3:
    """Render all samples for one pixel and return their raw sum.

    For each sample the pixel coordinate is jittered by a uniform offset in
    [0, 1) on each axis, then mapped to camera coordinates
    u = (column + du) / (width - 1), v = (row + dv) / (height - 1).
    Draw order per sample is du, dv, then any lens draws of the camera.

    Division by the sample count and gamma correction are left to the tone
    mapper.

    Args:
        column: Pixel x-coordinate (0 = left).
        row: Pixel y-coordinate (0 = bottom).
        scene: The scene to render.
        camera: The camera state.
        width: Image width in pixels (at least 2).
        height: Image height in pixels (at least 2).
        samples: Number of samples to accumulate.
        max_depth: Maximum recursion depth per path.
        rng: This pixel's random generator.

    Returns:
        The summed RGB radiance of all samples.
    """
    pixel_color = vec3(*BLACK)
    for _ in range(samples):
        u = (column + rng.random()) / (width - 1)
        v = (row + rng.random()) / (height - 1)
        ray = get_ray(camera, u, v, rng)
        pixel_color += ray_color(ray, scene, max_depth, rng)
    return pixel_color
