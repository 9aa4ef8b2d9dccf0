"""Dielectric (glass/water) material implementation.

This module implements the dielectric BSDF, which models transparent materials
like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from pathtracer.core.ray import Ray, dot, normalize, reflect, refract, schlick_fresnel
from pathtracer.materials.material import Material, ScatterResult

if TYPE_CHECKING:
    from pathtracer.geometry.sphere import HitRecord


def will_reflect(cos_theta: float, refraction_ratio: float, draw: float) -> bool:
    """Decide between reflection and refraction.

    Args:
        cos_theta: Cosine of the incident angle.
        refraction_ratio: n_incident / n_transmitted.
        draw: Uniform random number in [0, 1).

    Returns:
        True on total internal reflection or when the Fresnel reflectance
        exceeds the draw.
    """
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    cannot_refract = refraction_ratio * sin_theta > 1.0
    return cannot_refract or schlick_fresnel(cos_theta, refraction_ratio) > draw


def scatter_dielectric(
    material: Material,
    ray_in: Ray,
    record: HitRecord,
    rng: np.random.Generator,
) -> ScatterResult:
    """Compute the scattered ray for a dielectric surface.

    Dielectrics never absorb; the attenuation is white.

    Args:
        material: The dielectric material that was hit.
        ray_in: The incoming ray.
        record: The hit record at the surface.
        rng: The calling task's random generator.

    Returns:
        White attenuation and either the reflected or the refracted ray.
    """
    # Air to glass on the way in, glass to air on the way out
    refraction_ratio = 1.0 / material.ior if record.front_face else material.ior

    unit_direction = normalize(ray_in.direction)
    cos_theta = min(-dot(unit_direction, record.normal), 1.0)

    if will_reflect(cos_theta, refraction_ratio, rng.random()):
        direction = reflect(unit_direction, record.normal)
    else:
        direction = refract(unit_direction, record.normal, refraction_ratio)

    return ScatterResult(material.albedo, Ray(record.point, direction))
