"""Infinite plane primitive.

A plane is defined by a point on it and a normal. The normal is normalized
at construction and dot(normal, position) is cached, so each intersection
test needs only two dot products.

Example:
    >>> from obscura.core.color import Color
    >>> from obscura.core.vector import Vector
    >>> from obscura.geometry.plane import Plane
    >>> from obscura.materials.lambertian import Lambertian
    >>> floor = Plane(Lambertian(Color(0.5, 0.5, 0.5)), Vector(0, 0, 0), Vector(0, 0, 2))
    >>> floor.normal
    Vector(x=0.0, y=0.0, z=1.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from obscura.core.ray import Range, Ray
from obscura.core.vector import Vector, dot, normalize
from obscura.materials.material import Material


@dataclass(frozen=True)
class Plane:
    """An infinite plane.

    Attributes:
        material: Material of the plane.
        position: Any point on the plane.
        normal: Unit normal, normalized from the given vector.
        offset: Cached dot(normal, position).
    """

    material: Material
    position: Vector
    normal: Vector
    offset: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        normal = normalize(self.normal)
        object.__setattr__(self, "normal", normal)
        object.__setattr__(self, "offset", dot(normal, self.position))


def hit_plane(plane: Plane, ray: Ray, window: Range) -> float | None:
    """Find the distance at which a ray crosses a plane.

    Args:
        plane: The plane to test.
        ray: The ray to intersect.
        window: Accepted distance range.

    Returns:
        The hit distance, or None if the ray is parallel to the plane or
        the crossing lies outside the window.
    """
    denom = dot(plane.normal, ray.direction)
    if denom == 0.0:
        return None
    distance = (plane.offset - dot(plane.normal, ray.origin)) / denom
    if window.contains(distance):
        return distance
    return None


__all__ = ["Plane", "hit_plane"]
