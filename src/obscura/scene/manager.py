"""Scene container.

A Scene holds the surfaces to render, the refraction index of the medium
they sit in and the sky color. It is read-only while a capture runs.

Example:
    >>> from obscura.core.color import Color
    >>> from obscura.core.vector import Vector
    >>> from obscura.geometry import Plane, Sphere
    >>> from obscura.materials import Dielectric, Lambertian
    >>> from obscura.scene.manager import Scene
    >>> scene = Scene()
    >>> ground = Lambertian(Color(0.5, 0.5, 0.5))
    >>> scene.add(Plane(ground, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0)))
    >>> scene.add(Sphere(Dielectric(Color(1.0, 1.0, 1.0), 1.5), Vector(5.0, 0.0, 1.0), 1.0))
    >>> len(scene)
    2
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from obscura.core.color import DEFAULT_SKY, Color
from obscura.core.integrator import cast_ray, preview_color
from obscura.core.ray import Range, Ray
from obscura.geometry.surface import Intersection, Surface
from obscura.scene.intersection import find_nearest

logger = logging.getLogger(__name__)

# Refraction index of vacuum/air
DEFAULT_REFRACTION_INDEX = 1.0


@dataclass
class Scene:
    """A collection of surfaces lit by a sky.

    Attributes:
        surfaces: Surfaces in insertion order.
        refraction_index: Refraction index of the surrounding medium.
        sky: Sky color seen straight down, fading to white overhead.
    """

    surfaces: list[Surface] = field(default_factory=list)
    refraction_index: float = DEFAULT_REFRACTION_INDEX
    sky: Color = DEFAULT_SKY

    def __post_init__(self) -> None:
        if self.refraction_index <= 0.0:
            raise ValueError(
                f"Scene refraction index = {self.refraction_index} must be positive."
            )

    def __len__(self) -> int:
        return len(self.surfaces)

    def add(self, surface: Surface) -> None:
        """Append a surface to the scene."""
        self.surfaces.append(surface)
        logger.debug("Added %s (%d surfaces)", type(surface).__name__, len(self.surfaces))

    def find_nearest(self, ray: Ray, window: Range) -> Intersection | None:
        return find_nearest(self.surfaces, ray, window)

    def cast_ray(
        self,
        ray: Ray,
        window: Range,
        depth: int,
        rng: np.random.Generator,
    ) -> Color:
        """Trace a ray and return the light it gathers. See core.integrator."""
        return cast_ray(self, ray, window, depth, rng)

    def preview(self, ray: Ray, window: Range) -> Color:
        """Flat-shaded color along a ray, without bounces."""
        return preview_color(self, ray, window)


__all__ = ["DEFAULT_REFRACTION_INDEX", "Scene"]
