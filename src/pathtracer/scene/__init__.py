"""Scene module for scene storage and ray-scene queries.

Components:
    intersection: Immutable Scene container and closest-hit query
    presets: The default four-sphere scene and a randomized sphere field
"""

from .intersection import MAX_SPHERES, Scene, intersect_scene
from .presets import create_default_scene, create_random_scene

__all__ = [
    "Scene",
    "intersect_scene",
    "MAX_SPHERES",
    "create_default_scene",
    "create_random_scene",
]
