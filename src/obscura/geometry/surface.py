"""Surface union and the shared intersection routine.

Example:
    >>> from obscura.geometry.surface import intersect_surface
    >>> hit = intersect_surface(sphere, ray, Range(0.1, 1000.0))  # doctest: +SKIP
    >>> if hit is not None:
    ...     print(hit.distance, hit.point, hit.normal)
"""

from __future__ import annotations

from dataclasses import dataclass

from obscura.core.ray import Range, Ray
from obscura.core.vector import Vector, dot
from obscura.geometry.plane import Plane, hit_plane
from obscura.geometry.quadric import Quadric, hit_quadric, quadric_normal
from obscura.geometry.sphere import Sphere, hit_sphere, sphere_normal
from obscura.materials.material import Material

Surface = Plane | Quadric | Sphere


@dataclass(frozen=True)
class Intersection:
    """Hit record for a ray meeting a surface.

    Attributes:
        distance: Distance along the ray.
        point: Hit point in world space.
        normal: Outward unit surface normal at the hit point.
        material: Material of the surface that was hit.
    """

    distance: float
    point: Vector
    normal: Vector
    material: Material


def hit_distance(surface: Surface, ray: Ray, window: Range) -> float | None:
    """Dispatch to the nearest-hit routine of the surface kind."""
    match surface:
        case Plane():
            return hit_plane(surface, ray, window)
        case Sphere():
            return hit_sphere(surface, ray, window)
        case Quadric():
            return hit_quadric(surface, ray, window)
        case _:
            raise TypeError(f"Unsupported surface: {surface!r}")


def surface_normal(surface: Surface, point: Vector) -> Vector:
    """Dispatch to the normal routine of the surface kind."""
    match surface:
        case Plane():
            return surface.normal
        case Sphere():
            return sphere_normal(surface, point)
        case Quadric():
            return quadric_normal(surface, point)
        case _:
            raise TypeError(f"Unsupported surface: {surface!r}")


def intersect_surface(surface: Surface, ray: Ray, window: Range) -> Intersection | None:
    """Intersect a ray with a surface.

    Hits on the back of a surface with a one-sided material are discarded.

    Args:
        surface: The surface to test.
        ray: The ray to intersect.
        window: Accepted distance range.

    Returns:
        The intersection, or None on a miss.
    """
    distance = hit_distance(surface, ray, window)
    if distance is None:
        return None

    point = ray.project(distance)
    normal = surface_normal(surface, point)
    if surface.material.one_sided and dot(ray.direction, normal) >= 0.0:
        return None

    return Intersection(distance, point, normal, surface.material)


__all__ = ["Intersection", "Surface", "hit_distance", "intersect_surface", "surface_normal"]
