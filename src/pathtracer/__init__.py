"""Concurrent, order-preserving Monte Carlo path tracer for sphere scenes.

The image is rendered in pairs of rows on a thread pool and streamed as an
ASCII pixel map (P3) in strict top-to-bottom order, through a two-slot
self-sealing row buffer.

Subpackages:
    core: Ray utilities, the pixel sampler, the row buffer, retry guard
        and scheduler
    geometry: Sphere primitive and intersection
    materials: Lambertian, metal and dielectric scattering
    scene: Scene container and ready-made scenes
    camera: Pinhole / thin-lens camera
    output: Tone mapping, pixel-map streaming and PNG export
"""

__version__ = "0.1.0"
