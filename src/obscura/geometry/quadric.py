"""General quadric surface primitive.

A quadric is the zero set of a second-degree polynomial, here written
relative to the surface position p = x - position:

    A x^2 + B y^2 + C z^2 + 2D yz + 2E xz + 2F xy + 2G x + 2H y + 2I z + J = 0

Substituting the ray o + t d gives A_q t^2 + 2 B_q t + C_q = 0. Using the
half-B form, the discriminant is B_q^2 - A_q C_q and the roots are
(-B_q +/- sqrt(disc)) / A_q. Spheres, ellipsoids, cylinders, cones and
paraboloids are all quadrics.

Example:
    >>> from obscura.geometry.quadric import Quadric, QuadricEquation
    >>> # Infinite cylinder of radius 1 around the z axis
    >>> cylinder = QuadricEquation(a=1.0, b=1.0, j=-1.0)
    >>> pillar = Quadric(material, Vector(0.0, 0.0, 0.0), cylinder)  # doctest: +SKIP
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from obscura.core.ray import Range, Ray
from obscura.core.vector import Vector, normalize
from obscura.materials.material import Material


@dataclass(frozen=True)
class QuadricEquation:
    """Coefficients A..J of a quadric surface equation."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0
    e: float = 0.0
    f: float = 0.0
    g: float = 0.0
    h: float = 0.0
    i: float = 0.0
    j: float = 0.0

    @classmethod
    def from_sequence(cls, values) -> QuadricEquation:
        """Build an equation from ten coefficients in A..J order.

        Raises:
            ValueError: If there are not exactly ten coefficients.
        """
        values = tuple(float(v) for v in values)
        if len(values) != 10:
            raise ValueError(
                f"A quadric equation needs 10 coefficients, got {len(values)}."
            )
        return cls(*values)

    def gradient(self, p: Vector) -> Vector:
        """Half the gradient of the quadric form at local point p."""
        return Vector(
            self.a * p.x + self.f * p.y + self.e * p.z + self.g,
            self.f * p.x + self.b * p.y + self.d * p.z + self.h,
            self.e * p.x + self.d * p.y + self.c * p.z + self.i,
        )


@dataclass(frozen=True)
class Quadric:
    """A quadric surface.

    Attributes:
        material: Material of the surface.
        position: Origin of the equation's local coordinates.
        equation: Surface coefficients.
    """

    material: Material
    position: Vector
    equation: QuadricEquation


def hit_quadric(quadric: Quadric, ray: Ray, window: Range) -> float | None:
    """Find the nearest distance at which a ray meets a quadric.

    Args:
        quadric: The quadric to test.
        ray: The ray to intersect.
        window: Accepted distance range.

    Returns:
        The nearer root inside the window, else the farther root if it is
        inside, else None.
    """
    q = quadric.equation
    o = ray.origin - quadric.position
    d = ray.direction

    a_q = (
        q.a * d.x * d.x
        + q.b * d.y * d.y
        + q.c * d.z * d.z
        + 2.0 * (q.d * d.y * d.z + q.e * d.x * d.z + q.f * d.x * d.y)
    )
    b_q = (
        q.a * o.x * d.x
        + q.b * o.y * d.y
        + q.c * o.z * d.z
        + q.d * (o.y * d.z + o.z * d.y)
        + q.e * (o.x * d.z + o.z * d.x)
        + q.f * (o.x * d.y + o.y * d.x)
        + q.g * d.x
        + q.h * d.y
        + q.i * d.z
    )
    c_q = (
        q.a * o.x * o.x
        + q.b * o.y * o.y
        + q.c * o.z * o.z
        + 2.0 * (q.d * o.y * o.z + q.e * o.x * o.z + q.f * o.x * o.y)
        + 2.0 * (q.g * o.x + q.h * o.y + q.i * o.z)
        + q.j
    )

    if a_q == 0.0:
        # Linear in t: the ray runs parallel to an asymptotic direction
        if b_q == 0.0:
            return None
        distance = -c_q / (2.0 * b_q)
        return distance if window.contains(distance) else None

    discriminant = b_q * b_q - a_q * c_q
    if discriminant < 0.0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    near, far = sorted(((-b_q - sqrt_disc) / a_q, (-b_q + sqrt_disc) / a_q))
    if window.contains(near):
        return near
    if window.contains(far):
        return far
    return None


def quadric_normal(quadric: Quadric, point: Vector) -> Vector:
    """Compute the unit normal of a quadric at a point on its surface.

    Raises:
        ValueError: At singular points where the gradient vanishes.
    """
    return normalize(quadric.equation.gradient(point - quadric.position))


__all__ = ["Quadric", "QuadricEquation", "hit_quadric", "quadric_normal"]
