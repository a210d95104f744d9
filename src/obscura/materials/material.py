"""Material union and scatter dispatch.

The set of materials is closed: a Material is a Lambertian, a Metallic or a
Dielectric, and :func:`scatter` dispatches on the concrete type.

Example:
    >>> import numpy as np
    >>> from obscura.materials.material import scatter
    >>> bounce = scatter(material, ray, point, normal, 1.0, np.random.default_rng(42))  # doctest: +SKIP
"""

from __future__ import annotations

import numpy as np

from obscura.core.ray import Ray
from obscura.core.vector import Vector
from obscura.materials.dielectric import Dielectric, scatter_dielectric
from obscura.materials.lambertian import Lambertian, scatter_lambertian
from obscura.materials.metallic import Metallic, scatter_metallic

Material = Lambertian | Metallic | Dielectric


def scatter(
    material: Material,
    incoming: Ray,
    point: Vector,
    normal: Vector,
    ambient_index: float,
    rng: np.random.Generator,
) -> Ray | None:
    """Produce the outgoing ray for a hit, or None if the light is absorbed.

    Args:
        material: The material at the hit point.
        incoming: The ray that hit the surface.
        point: The hit point.
        normal: The outward unit surface normal at the hit point.
        ambient_index: Refraction index of the scene medium.
        rng: Random generator for stochastic scattering.

    Returns:
        The scattered ray, or None on absorption.

    Raises:
        TypeError: If the material is not one of the supported kinds.
    """
    match material:
        case Lambertian():
            return scatter_lambertian(point, normal, rng)
        case Metallic(fuzz=fuzz):
            return scatter_metallic(fuzz, incoming, point, normal, rng)
        case Dielectric(index=index):
            return scatter_dielectric(index, incoming, point, normal, ambient_index, rng)
        case _:
            raise TypeError(f"Unsupported material: {material!r}")


__all__ = ["Material", "scatter"]
