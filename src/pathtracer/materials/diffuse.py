"""Lambertian (ideal diffuse) material implementation.

The scattered direction is the surface normal plus a random unit vector,
which distributes directions with a cosine falloff around the normal. The
attenuation is simply the albedo.

Example:
    >>> import numpy as np
    >>> from pathtracer.materials import lambertian
    >>> from pathtracer.materials.diffuse import scatter_lambertian
    >>> # result = scatter_lambertian(lambertian((0.5, 0.5, 0.5)), record, np.random.default_rng())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pathtracer.core.ray import Ray, near_zero, random_unit_vector
from pathtracer.materials.material import Material, ScatterResult

if TYPE_CHECKING:
    from pathtracer.geometry.sphere import HitRecord


def scatter_lambertian(
    material: Material,
    record: HitRecord,
    rng: np.random.Generator,
) -> ScatterResult:
    """Sample a scattered ray for a Lambertian surface.

    Lambertian surfaces never absorb the path, so this always returns a
    result.

    Args:
        material: The Lambertian material that was hit.
        record: The hit record at the surface.
        rng: The calling task's random generator.

    Returns:
        The albedo as attenuation and a ray leaving the hit point.
    """
    scatter_direction = record.normal + random_unit_vector(rng)

    # Catch degenerate scatter direction
    if near_zero(scatter_direction):
        scatter_direction = record.normal

    return ScatterResult(material.albedo, Ray(record.point, scatter_direction))
