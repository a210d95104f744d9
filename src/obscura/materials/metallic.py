"""Metallic (specular) material with optional fuzz.

Metals reflect incoming light about the surface normal. A fuzz factor
perturbs the reflection by a random offset scaled by ``fuzz``, blurring
the reflection. Perturbed rays that end up below the surface are absorbed.

Example:
    >>> from obscura.core.color import Color
    >>> from obscura.materials.metallic import Metallic
    >>> mirror = Metallic(Color(0.9, 0.9, 0.9))
    >>> brushed = Metallic(Color(0.8, 0.6, 0.2), fuzz=0.3)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from obscura.core.color import Color
from obscura.core.ray import Ray
from obscura.core.vector import Vector, dot, near_zero, random_unit_vector, reflect
from obscura.materials._validation import validate_color


@dataclass(frozen=True)
class Metallic:
    """Reflective material.

    Attributes:
        color: Fraction of light reflected per channel.
        fuzz: Radius of the random perturbation added to the reflection.
            0 is a perfect mirror.
    """

    color: Color
    fuzz: float = 0.0
    one_sided: ClassVar[bool] = True

    def __post_init__(self) -> None:
        validate_color(self.color, "Metallic")
        if self.fuzz < 0.0:
            raise ValueError(f"Fuzz = {self.fuzz} is negative. Fuzz must be >= 0.")


def scatter_metallic(
    fuzz: float,
    incoming: Ray,
    point: Vector,
    normal: Vector,
    rng: np.random.Generator,
) -> Ray | None:
    """Reflect a ray off a metallic surface.

    Args:
        fuzz: Perturbation radius of the reflection.
        incoming: The ray that hit the surface.
        point: The hit point.
        normal: The unit surface normal at the hit point.
        rng: Random generator, only drawn from when fuzz > 0.

    Returns:
        The reflected ray, or None if the reflection points into the surface.
    """
    direction = reflect(incoming.direction, normal)
    if fuzz > 0.0:
        direction = direction + random_unit_vector(rng) * fuzz
        if near_zero(direction):
            return None

    bounce = Ray(point, direction)

    # Grazing and inward reflections are absorbed
    if dot(bounce.direction, normal) <= 0.0:
        return None
    return bounce


__all__ = ["Metallic", "scatter_metallic"]
