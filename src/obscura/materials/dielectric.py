"""Dielectric (glass/water) material implementation.

This module implements transparent materials that both reflect and refract.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.
Dielectrics are two-sided: a ray inside the material hits the back of the
surface, and is then refracted out into the surrounding medium.

Example:
    >>> from obscura.core.color import Color
    >>> from obscura.materials.dielectric import Dielectric
    >>> glass = Dielectric(Color(1.0, 1.0, 1.0), index=1.5)
    >>> water = Dielectric(Color(0.81, 0.9, 1.0), index=1.33)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from obscura.core.color import Color
from obscura.core.ray import Ray
from obscura.core.vector import Vector, dot, reflect, refract
from obscura.materials._validation import validate_color


@dataclass(frozen=True)
class Dielectric:
    """Transparent material.

    The color is stored as the channel-wise square root of the given color,
    since light usually crosses a dielectric surface twice (in and out).

    Attributes:
        color: Per-channel transmission, after the square root transform.
        index: Refraction index of the material. Common values:
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    color: Color
    index: float = 1.5
    one_sided: ClassVar[bool] = False

    def __post_init__(self) -> None:
        validate_color(self.color, "Dielectric")
        if self.index <= 0.0:
            raise ValueError(
                f"Refraction index = {self.index} must be positive."
            )
        object.__setattr__(self, "color", self.color.apply_transform(math.sqrt))


def schlick_reflectance(cosine: float, outer_index: float, inner_index: float) -> float:
    """Schlick's approximation of the Fresnel reflectance.

    Args:
        cosine: Cosine of the angle between the ray and the normal.
        outer_index: Refraction index of the surrounding medium.
        inner_index: Refraction index of the material.

    Returns:
        Probability of reflection in [0, 1].
    """
    r0 = (outer_index - inner_index) / (outer_index + inner_index)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


def scatter_dielectric(
    index: float,
    incoming: Ray,
    point: Vector,
    normal: Vector,
    ambient_index: float,
    rng: np.random.Generator,
) -> Ray:
    """Reflect or refract a ray at a dielectric surface.

    Args:
        index: Refraction index of the material.
        incoming: The ray that hit the surface.
        point: The hit point.
        normal: The outward unit normal of the surface at the hit point.
        ambient_index: Refraction index of the scene medium.
        rng: Random generator for the reflect/refract choice.

    Returns:
        The reflected or refracted ray. Dielectrics never absorb.
    """
    direction = incoming.direction
    cos_d = dot(direction, normal)

    if cos_d > 0.0:
        # Exiting the material
        cosine = cos_d
        refracted = refract(direction, -normal, index / ambient_index)
    else:
        # Entering the material
        cosine = -cos_d
        refracted = refract(direction, normal, ambient_index / index)

    reflectance = schlick_reflectance(cosine, ambient_index, index)

    # Exactly one draw per call, whichever branch is taken
    draw = rng.random()
    if refracted is None or draw < reflectance:
        return Ray(point, reflect(direction, normal))
    return Ray(point, refracted)


__all__ = ["Dielectric", "schlick_reflectance", "scatter_dielectric"]
