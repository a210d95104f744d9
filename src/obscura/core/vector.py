"""Three-dimensional vector type and vector utility functions.

Vectors are immutable values; every operation returns a new Vector. The free
functions mirror the operations the integrator and the materials need:
dot and cross products, normalization, reflection and refraction about a
surface normal, and random unit vectors drawn from an explicit generator.

Example:
    >>> import numpy as np
    >>> from obscura.core.vector import Vector, normalize, reflect
    >>> d = normalize(Vector(1.0, -1.0, 0.0))
    >>> bounced = reflect(d, Vector(0.0, 1.0, 0.0))  # (0.707, 0.707, 0.0)
    >>> rng = np.random.default_rng(42)
    >>> v = random_unit_vector(rng)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

# Squared-length threshold under which a vector counts as degenerate
NEAR_ZERO_EPSILON = 1e-8


@dataclass(frozen=True, slots=True)
class Vector:
    """An immutable 3D vector.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component (the vertical axis).
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, other: float | Vector) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vector:
        return self.__mul__(other)

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vector, b: Vector) -> float:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector, b: Vector) -> Vector:
    """Compute the cross product a x b."""
    return Vector(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def normalize(v: Vector) -> Vector:
    """Return a unit vector in the direction of v.

    Args:
        v: The vector to normalize.

    Returns:
        v divided by its magnitude.

    Raises:
        ValueError: If v has zero magnitude.
    """
    length = v.magnitude()
    if length == 0.0:
        raise ValueError(f"Cannot normalize zero-length vector {v}.")
    return v / length


def near_zero(v: Vector) -> bool:
    """Check whether a vector is close to zero in every direction.

    Used to catch degenerate scatter directions, e.g. when a random unit
    vector almost exactly cancels the surface normal.
    """
    return dot(v, v) < NEAR_ZERO_EPSILON


def reflect(direction: Vector, normal: Vector) -> Vector:
    """Reflect a direction about a surface normal.

    Args:
        direction: The incoming direction.
        normal: The unit surface normal.

    Returns:
        direction - 2 * dot(direction, normal) * normal.
    """
    return direction - normal * (2.0 * dot(direction, normal))


def refract(direction: Vector, normal: Vector, eta: float) -> Vector | None:
    """Refract a unit direction through a surface using Snell's law.

    The normal must point against the incoming direction, so that
    cos_i = -dot(direction, normal) is non-negative.

    Args:
        direction: The incoming unit direction.
        normal: The unit surface normal on the incoming side.
        eta: Ratio of refraction indices, n_incident / n_transmitted.

    Returns:
        The refracted direction, or None under total internal reflection.
    """
    cos_i = -dot(direction, normal)
    sin_t2 = eta * eta * (1.0 - cos_i * cos_i)
    if sin_t2 > 1.0:
        return None
    cos_t = math.sqrt(1.0 - sin_t2)
    return direction * eta + normal * (eta * cos_i - cos_t)


def random_unit_vector(rng: np.random.Generator) -> Vector:
    """Sample a uniformly distributed unit vector.

    Normalizing a standard normal sample gives a uniform direction on the
    sphere without rejection sampling.

    Args:
        rng: The random generator to draw from.

    Returns:
        A random unit vector.
    """
    while True:
        x, y, z = (float(c) for c in rng.standard_normal(3))
        length = math.sqrt(x * x + y * y + z * z)
        # The chance of a zero-length sample is negligible but not zero
        if length > 0.0:
            return Vector(x / length, y / length, z / length)


__all__ = [
    "NEAR_ZERO_EPSILON",
    "Vector",
    "cross",
    "dot",
    "near_zero",
    "normalize",
    "random_unit_vector",
    "reflect",
    "refract",
]
