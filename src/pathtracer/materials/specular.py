"""Metal (specular reflective) material implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pathtracer.core.ray import Ray, dot, normalize, random_in_unit_sphere, reflect
from pathtracer.materials.material import Material, ScatterResult

if TYPE_CHECKING:
    from pathtracer.geometry.sphere import HitRecord


def scatter_metal(
    material: Material,
    ray_in: Ray,
    record: HitRecord,
    rng: np.random.Generator,
) -> ScatterResult | None:
    """Compute the scattered ray for a metal surface.

    Reflects the incident ray about the surface normal, then perturbs the
    reflected direction by the material's fuzz. The ray is absorbed if the
    perturbed direction ends up below the surface.

    Args:
        material: The metal material that was hit.
        ray_in: The incoming ray.
        record: The hit record at the surface.
        rng: The calling task's random generator.

    Returns:
        The albedo and reflected ray, or None if the ray was absorbed.
    """
    reflected = reflect(normalize(ray_in.direction), record.normal)
    direction = reflected + material.fuzz * random_in_unit_sphere(rng)

    if dot(direction, record.normal) <= 0.0:
        return None
    return ScatterResult(material.albedo, Ray(record.point, direction))
