"""Materials module for surface scattering models.

Components:
    material: The tagged Material value and its constructors
    diffuse: Ideal diffuse (Lambertian) reflection
    specular: Metal reflection with optional fuzz
    refractive: Glass-like dielectrics with refraction (Schlick Fresnel)

Submodule names must not collide with the lambertian(), metal() and
dielectric() constructors exported here.

Each scatter function takes the caller's random generator and returns either
a ScatterResult (attenuation, scattered ray) or None when the ray is absorbed.
"""

from .diffuse import scatter_lambertian
from .material import (
    Material,
    MaterialType,
    ScatterResult,
    dielectric,
    lambertian,
    metal,
)
from .refractive import scatter_dielectric, will_reflect
from .specular import scatter_metal

__all__ = [
    "Material",
    "MaterialType",
    "ScatterResult",
    "lambertian",
    "metal",
    "dielectric",
    "scatter_lambertian",
    "scatter_metal",
    "scatter_dielectric",
    "will_reflect",
]
