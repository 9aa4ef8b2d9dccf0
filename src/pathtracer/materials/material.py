"""Closed set of surface materials.

A material is a tagged value: ``MaterialType`` selects which scatter function
the integrator dispatches to, and the remaining fields carry that variant's
parameters. Materials are immutable and shared read-only by every worker.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple

from pathtracer.core.ray import Ray, Vec3, vec3


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used for material dispatch in the path tracer to determine which
    scattering function to call.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


@dataclass(frozen=True)
class Material:
    """A surface material.

    Attributes:
        material_type: Which scattering model applies.
        albedo: Reflectance color (Lambertian and metal).
        fuzz: Reflection perturbation radius in [0, 1] (metal).
        ior: Index of refraction (dielectric).
    """

    material_type: MaterialType
    albedo: Vec3
    fuzz: float = 0.0
    ior: float = 1.0


class ScatterResult(NamedTuple):
    """Outcome of a scatter event that was not absorbed."""

    attenuation: Vec3
    scattered: Ray


def _validate_albedo(albedo: tuple[float, float, float]) -> Vec3:
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return vec3(*albedo)


def lambertian(albedo: tuple[float, float, float]) -> Material:
    """Create an ideal diffuse material."""
    return Material(MaterialType.LAMBERTIAN, _validate_albedo(albedo))


def metal(albedo: tuple[float, float, float], fuzz: float = 0.0) -> Material:
    """Create a reflective metal material.

    Args:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Roughness of the reflection; values above 1 are clamped to 1.

    Raises:
        ValueError: If fuzz is negative or an albedo component is outside [0, 1].
    """
    if fuzz < 0.0:
        raise ValueError(f"Metal fuzz must be non-negative, got {fuzz}")
    return Material(MaterialType.METAL, _validate_albedo(albedo), fuzz=min(fuzz, 1.0))


def dielectric(ior: float) -> Material:
    """Create a clear dielectric (glass, water) material.

    Raises:
        ValueError: If the index of refraction is not positive.
    """
    if ior <= 0.0:
        raise ValueError(f"Index of refraction must be positive, got {ior}")
    return Material(MaterialType.DIELECTRIC, vec3(1.0, 1.0, 1.0), ior=ior)
