"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with robust ray-sphere intersection

Intersection follows the pattern:
    record = hit_sphere(ray, sphere, t_min, t_max)  # HitRecord or None
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_sphere

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
]
