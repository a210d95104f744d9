"""Ray and distance-window types.

A Ray has an origin and a unit direction; the direction is normalized at
construction so every consumer can rely on it. A Range is the window of
distances along a ray in which hits are accepted. The camera frustum is a
Range, and the integrator narrows it as a path bounces through the scene.

Example:
    >>> from obscura.core.ray import Range, Ray
    >>> from obscura.core.vector import Vector
    >>> ray = Ray(Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, -2.0))
    >>> ray.project(5.0)
    Vector(x=0.0, y=0.0, z=-5.0)
    >>> Range(0.1, 1000.0).contains(5.0)
    True
"""

from __future__ import annotations

from dataclasses import dataclass

from obscura.core.vector import Vector, normalize


@dataclass(frozen=True, slots=True)
class Ray:
    """A half-line with an origin point and a unit direction.

    Attributes:
        origin: The starting point of the ray.
        direction: The unit direction of the ray.

    Raises:
        ValueError: If the direction has zero length.
    """

    origin: Vector
    direction: Vector

    def __post_init__(self) -> None:
        # frozen dataclass, so the normalized direction is set directly
        object.__setattr__(self, "direction", normalize(self.direction))

    def project(self, distance: float) -> Vector:
        """Compute the point origin + distance * direction."""
        return self.origin + self.direction * distance


@dataclass(frozen=True, slots=True)
class Range:
    """An inclusive window [lower, upper] of accepted hit distances.

    A window whose upper bound has been narrowed below its lower bound is
    empty and contains nothing.

    Attributes:
        lower: Smallest accepted distance.
        upper: Largest accepted distance.
    """

    lower: float
    upper: float

    def contains(self, value: float) -> bool:
        """Check whether lower <= value <= upper."""
        return self.lower <= value <= self.upper

    def with_upper(self, upper: float) -> Range:
        """Return a copy of this window with a new upper bound."""
        return Range(self.lower, upper)


__all__ = ["Range", "Ray"]
