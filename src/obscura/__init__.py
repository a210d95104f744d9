"""Obscura: a Monte Carlo path tracer for analytic surfaces.

Packages:
    core: Vector math, rays, colors and the recursive integrator.
    geometry: Planes, quadrics and spheres.
    materials: Lambertian, metallic and dielectric scattering.
    scene: Surface collections, nearest-hit search and the scene file loader.
    camera: Pinhole camera with per-pixel sampling and timing hooks.
    preview: PNG export and matplotlib display.
"""

__version__ = "0.1.0"
