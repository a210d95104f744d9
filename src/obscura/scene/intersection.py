"""Nearest-hit search over a list of surfaces.

Surfaces are scanned linearly. Each hit narrows the window's upper bound to
its distance, so later surfaces only report hits that are strictly useful.

Example:
    >>> from obscura.scene.intersection import find_nearest
    >>> hit = find_nearest(surfaces, ray, Range(0.1, 1000.0))  # doctest: +SKIP
"""

from __future__ import annotations

from collections.abc import Iterable

from obscura.core.ray import Range, Ray
from obscura.geometry.surface import Intersection, Surface, intersect_surface


def find_nearest(surfaces: Iterable[Surface], ray: Ray, window: Range) -> Intersection | None:
    """Find the nearest intersection of a ray with any surface.

    Args:
        surfaces: Surfaces to test.
        ray: The ray to intersect.
        window: Accepted distance range.

    Returns:
        The nearest intersection inside the window, or None.
    """
    nearest = None
    for surface in surfaces:
        hit = intersect_surface(surface, ray, window)
        if hit is not None:
            nearest = hit
            window = window.with_upper(hit.distance)
    return nearest


__all__ = ["find_nearest"]
