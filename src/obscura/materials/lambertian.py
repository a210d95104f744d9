"""Lambertian (ideal diffuse) material.

A Lambertian surface scatters light in a cosine-weighted distribution about
the surface normal. The bounce direction is the normal plus a random unit
vector, which produces exactly that distribution.

Example:
    >>> import numpy as np
    >>> from obscura.core.color import Color
    >>> from obscura.materials.lambertian import Lambertian, scatter_lambertian
    >>> chalk = Lambertian(Color(0.8, 0.8, 0.8))
    >>> rng = np.random.default_rng(42)
    >>> bounce = scatter_lambertian(point, normal, rng)  # doctest: +SKIP
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from obscura.core.color import Color
from obscura.core.ray import Ray
from obscura.core.vector import Vector, near_zero, random_unit_vector
from obscura.materials._validation import validate_color


@dataclass(frozen=True)
class Lambertian:
    """Diffuse material.

    Attributes:
        color: Fraction of light reflected per channel.
    """

    color: Color
    one_sided: ClassVar[bool] = True

    def __post_init__(self) -> None:
        validate_color(self.color, "Lambertian")


def scatter_lambertian(point: Vector, normal: Vector, rng: np.random.Generator) -> Ray:
    """Scatter a ray diffusely from a surface point.

    Args:
        point: The hit point.
        normal: The unit surface normal at the hit point.
        rng: Random generator for the bounce direction.

    Returns:
        The bounced ray. Diffuse surfaces never absorb.
    """
    direction = normal + random_unit_vector(rng)

    # Catch degenerate scatter direction
    if near_zero(direction):
        direction = normal

    return Ray(point, direction)


__all__ = ["Lambertian", "scatter_lambertian"]
