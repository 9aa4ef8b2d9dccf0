"""Sphere primitive with robust ray-sphere intersection.

This module provides a Sphere dataclass and intersection function using the
robust quadratic formula from Ray Tracing Gems to avoid floating-point
artifacts.

The robust quadratic formula avoids catastrophic cancellation when b^2 is
nearly equal to 4ac by using a reformulated calculation that maintains
numerical stability.

Example:
    >>> from pathtracer.core.ray import Ray, vec3
    >>> from pathtracer.geometry.sphere import Sphere, hit_sphere
    >>> from pathtracer.materials import lambertian
    >>> sphere = Sphere(center=vec3(0, 0, -1), radius=0.5, material=lambertian((0.5, 0.5, 0.5)))
    >>> rec = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), sphere, 0.001, float("inf"))
    >>> rec.t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray, Vec3, dot, ray_at, vec3

if TYPE_CHECKING:
    from pathtracer.materials import Material


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius, carrying its material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive float).
        material: The material used to scatter rays hitting this sphere.
    """

    center: Vec3
    radius: float
    material: Material


@dataclass(frozen=True)
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray intersected the sphere.
        normal: The surface normal at the intersection point (unit length,
            always facing against the incoming ray).
        front_face: True if the ray hit the sphere from outside.
        material: The material of the sphere that was hit.
    """

    t: float
    point: Vec3
    normal: Vec3
    front_face: bool
    material: Material


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-10:
        # Tangent ray: fall back to the standard formula
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


def hit_sphere(ray: Ray, sphere: Sphere, t_min: float, t_max: float) -> HitRecord | None:
    """Test for ray-sphere intersection.

    The intersection is found by solving:
        |origin + t * direction - center|^2 = radius^2

    which expands to a*t^2 + 2*h*t + c = 0 with
        a = dot(direction, direction)
        h = dot(direction, oc)
        c = dot(oc, oc) - radius^2
        oc = origin - center

    Args:
        ray: The ray to test.
        sphere: The sphere to test intersection against.
        t_min: Minimum t value to consider a valid hit (avoids self-intersection).
        t_max: Maximum t value to consider a valid hit.

    Returns:
        A HitRecord for the nearest root in (t_min, t_max), or None on a miss.
    """
    oc = ray.origin - sphere.center
    a = dot(ray.direction, ray.direction)
    h = dot(ray.direction, oc)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = h * h - a * c
    if discriminant < 0.0 or a == 0.0:
        return None

    t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

    t = t0
    if not t_min < t < t_max:
        t = t1
        if not t_min < t < t_max:
            return None

    point = ray_at(ray, t)
    outward_normal = (point - sphere.center) / sphere.radius

    # Front face: ray direction and outward normal point in opposite directions
    front_face = dot(ray.direction, outward_normal) < 0.0
    normal = outward_normal if front_face else -outward_normal

    return HitRecord(
        t=t,
        point=point,
        normal=normal,
        front_face=front_face,
        material=sphere.material,
    )


def make_sphere(
    center: tuple[float, float, float], radius: float, material: Material
) -> Sphere:
    """Create a sphere from a center tuple, radius and material."""
    return Sphere(center=vec3(*center), radius=float(radius), material=material)
