"""Core rendering module.

Components:
    ray: Ray data structure, vector helpers and random sampling
    errors: Exception taxonomy of the rendering pipeline
    integrator: Recursive per-pixel path sampler
    pingpong: Two-slot self-sealing row buffer
    retry: Bounded retry-with-backoff for buffer writes
    scheduler: Row-pair parallel scheduler and the render() entry point
"""

from .errors import (
    BufferWriteError,
    InvalidSlotError,
    RenderError,
    RetriesExhaustedError,
    SealedWriteError,
    UsageError,
)
from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_squared,
    near_zero,
    normalize,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    ray_at,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)

# Note: integrator, pingpong, retry and scheduler are NOT imported here to
# avoid circular imports. Import them directly, e.g.
#   from pathtracer.core.scheduler import RenderSettings, render

__all__ = [
    "Ray",
    "ray_at",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_fresnel",
    "near_zero",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
    "RenderError",
    "UsageError",
    "BufferWriteError",
    "InvalidSlotError",
    "SealedWriteError",
    "RetriesExhaustedError",
]
