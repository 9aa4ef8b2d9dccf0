"""Scene container and scene-level intersection testing.

A Scene is an immutable, ordered collection of spheres. It is built once
before rendering and shared read-only by every worker thread, so no
synchronization is needed around it.

Example:
    >>> from pathtracer.core.ray import Ray, vec3
    >>> from pathtracer.geometry.sphere import make_sphere
    >>> from pathtracer.materials import lambertian
    >>> from pathtracer.scene.intersection import Scene, intersect_scene
    >>> scene = Scene.of(make_sphere((0, 0, -1), 0.5, lambertian((0.5, 0.5, 0.5))))
    >>> rec = intersect_scene(scene, Ray(vec3(0, 0, 0), vec3(0, 0, -1)), 0.001, float("inf"))
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from pathtracer.core.ray import Ray
from pathtracer.geometry.sphere import HitRecord, Sphere, hit_sphere

# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024


@dataclass(frozen=True)
class Scene:
    """An ordered, immutable list of hittable spheres.

    Attributes:
        spheres: The primitives, tested in insertion order.
    """

    spheres: tuple[Sphere, ...] = ()

    def __post_init__(self) -> None:
        if len(self.spheres) > MAX_SPHERES:
            raise ValueError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")

    @classmethod
    def of(cls, *spheres: Sphere) -> Scene:
        """Build a scene from spheres given as arguments."""
        return cls(tuple(spheres))

    def add(self, sphere: Sphere) -> Scene:
        """Return a new scene with one more sphere appended."""
        return Scene(self.spheres + (sphere,))

    def __len__(self) -> int:
        return len(self.spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.spheres)


def intersect_scene(scene: Scene, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
    """Test a ray against all primitives in the scene.

    Tracks the closest hit by shrinking t_max as hits are found.

    Args:
        scene: The scene to test against.
        ray: The ray to trace.
        t_min: Minimum t value to consider a valid hit.
        t_max: Maximum t value to consider a valid hit.

    Returns:
        The closest HitRecord, or None if nothing was hit.
    """
    closest_t = t_max
    result = None

    for sphere in scene.spheres:
        rec = hit_sphere(ray, sphere, t_min, closest_t)
        if rec is not None:
            closest_t = rec.t
            result = rec

    return result

