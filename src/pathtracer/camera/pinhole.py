"""Pinhole / thin-lens camera model for primary ray generation.

This module implements a camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- Optional aperture for depth of field (thin lens)

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

setup_camera() turns the configuration into an immutable CameraState that
every worker thread reads without locking.

Example:
    >>> import numpy as np
    >>> from pathtracer.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 0.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=90.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> state = setup_camera(camera)
    >>> ray = get_ray(state, 0.5, 0.5, np.random.default_rng())  # Image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import Ray, Vec3, random_in_unit_disk

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a perspective camera.

    With aperture 0 this is a perfect pinhole camera with no depth of field.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 disables depth of field.
        focus_dist: Distance from the camera to the plane of perfect focus.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    aperture: float = 0.0
    focus_dist: float = 1.0


@dataclass(frozen=True)
class CameraState:
    """Precomputed viewport geometry for ray generation.

    Attributes:
        origin: Camera position.
        u: Right direction in world space.
        v: Up direction in world space.
        w: Backward direction (opposite the view direction).
        horizontal: Full viewport width vector.
        vertical: Full viewport height vector.
        lower_left: Lower-left corner of the viewport.
        lens_radius: Half the aperture.
    """

    origin: Vec3
    u: Vec3
    v: Vec3
    w: Vec3
    horizontal: Vec3
    vertical: Vec3
    lower_left: Vec3
    lens_radius: float


# =============================================================================
# Camera Setup (called once per camera configuration)
# =============================================================================


def setup_camera(camera: PinholeCamera) -> CameraState:
    """Compute the camera state from its configuration.

    The viewport is a virtual image plane at focus_dist from the camera.
    Ray directions are computed by interpolating across this viewport.

    Args:
        camera: Camera configuration with position, orientation, and FOV.

    Returns:
        The immutable CameraState used by get_ray().

    Raises:
        ValueError: If the view direction is degenerate or parallel to vup.
    """
    theta = math.radians(camera.vfov)
    h = math.tan(theta / 2.0)

    viewport_height = 2.0 * h
    viewport_width = camera.aspect_ratio * viewport_height

    lookfrom = np.array(camera.lookfrom, dtype=np.float64)
    lookat = np.array(camera.lookat, dtype=np.float64)
    vup = np.array(camera.vup, dtype=np.float64)

    # w points from lookat toward lookfrom (backward)
    w = lookfrom - lookat
    w_norm = np.linalg.norm(w)
    if w_norm == 0.0:
        raise ValueError("lookfrom and lookat must differ")
    w = w / w_norm

    # u points right (perpendicular to w and vup)
    u = np.cross(vup, w)
    u_norm = np.linalg.norm(u)
    if u_norm == 0.0:
        raise ValueError("vup must not be parallel to the view direction")
    u = u / u_norm

    v = np.cross(w, u)

    horizontal = camera.focus_dist * viewport_width * u
    vertical = camera.focus_dist * viewport_height * v
    lower_left = lookfrom - horizontal / 2.0 - vertical / 2.0 - camera.focus_dist * w

    return CameraState(
        origin=lookfrom,
        u=u,
        v=v,
        w=w,
        horizontal=horizontal,
        vertical=vertical,
        lower_left=lower_left,
        lens_radius=camera.aperture / 2.0,
    )


# =============================================================================
# Ray Generation
# =============================================================================


def get_ray(state: CameraState, s: float, t: float, rng: np.random.Generator) -> Ray:
    """Generate a ray through normalized image coordinates (s, t).

    - s = 0: left edge of image, s = 1: right edge
    - t = 0: bottom edge of image, t = 1: top edge

    Lens sampling draws from rng only when the lens radius is non-zero.

    Args:
        state: The camera state from setup_camera().
        s: Horizontal coordinate in [0, 1] (left to right).
        t: Vertical coordinate in [0, 1] (bottom to top).
        rng: The calling task's random generator.

    Returns:
        A Ray from the (possibly lens-offset) camera origin toward the
        specified point on the image plane.
    """
    origin = state.origin
    if state.lens_radius > 0.0:
        rd = state.lens_radius * random_in_unit_disk(rng)
        origin = origin + state.u * rd[0] + state.v * rd[1]

    target = state.lower_left + s * state.horizontal + t * state.vertical
    return Ray(origin, target - origin)


def get_camera_info(state: CameraState) -> dict[str, tuple[float, float, float]]:
    """Get camera vectors as plain tuples for logging and debugging."""
    return {
        name: tuple(float(c) for c in getattr(state, name))
        for name in ("origin", "u", "v", "w", "horizontal", "vertical", "lower_left")
    }
