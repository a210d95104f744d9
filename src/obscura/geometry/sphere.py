"""Sphere primitive.

A sphere is the quadric x^2 + y^2 + z^2 - r^2 = 0. It reuses the quadric
intersection and only replaces the normal with the closed form
(point - position) / radius.

Example:
    >>> from obscura.geometry.sphere import Sphere
    >>> ball = Sphere(material, Vector(0.0, 0.0, 1.0), radius=1.0)  # doctest: +SKIP
    >>> ball.quadric.equation.j
    -1.0
"""

from __future__ import annotations

from dataclasses import dataclass, field

from obscura.core.ray import Range, Ray
from obscura.core.vector import Vector, normalize
from obscura.geometry.quadric import Quadric, QuadricEquation, hit_quadric
from obscura.materials.material import Material


@dataclass(frozen=True)
class Sphere:
    """A sphere, stored alongside its equivalent quadric.

    Attributes:
        material: Material of the sphere.
        position: Center of the sphere.
        radius: Radius of the sphere. Must be positive.
        quadric: The derived quadric used for intersection.
    """

    material: Material
    position: Vector
    radius: float
    quadric: Quadric = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius = {self.radius} must be positive.")
        equation = QuadricEquation(a=1.0, b=1.0, c=1.0, j=-self.radius * self.radius)
        object.__setattr__(self, "quadric", Quadric(self.material, self.position, equation))


def hit_sphere(sphere: Sphere, ray: Ray, window: Range) -> float | None:
    """Find the nearest distance at which a ray meets a sphere."""
    return hit_quadric(sphere.quadric, ray, window)


def sphere_normal(sphere: Sphere, point: Vector) -> Vector:
    """Outward unit normal of a sphere at a point on its surface."""
    return normalize(point - sphere.position)


__all__ = ["Sphere", "hit_sphere", "sphere_normal"]
