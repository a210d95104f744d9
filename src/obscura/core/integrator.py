"""Recursive path tracing integrator.

Implements the color accumulation for a single camera ray. Each bounce
finds the nearest surface, asks its material to scatter the ray, and
multiplies the material color into the light gathered by the bounced ray:

    L(ray) = color(hit) * L(scatter(ray, hit))

Rays that escape the scene pick up the sky gradient. Rays that are absorbed
or run out of depth contribute black.

The remaining distance budget shrinks with each bounce: a path can travel
at most window.upper in total before it is cut off.

Example:
    >>> import numpy as np
    >>> from obscura.core.integrator import cast_ray
    >>> from obscura.core.ray import Range, Ray
    >>> color = cast_ray(scene, ray, Range(0.1, 1000.0), 10, np.random.default_rng(42))  # doctest: +SKIP
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from obscura.core.color import BLACK, WHITE, Color
from obscura.core.ray import Range, Ray
from obscura.materials.material import scatter

if TYPE_CHECKING:
    from obscura.scene.manager import Scene


def sky_color(sky: Color, ray: Ray) -> Color:
    """Background color seen along an escaping ray.

    Blends from the sky color looking straight down the z axis toward
    white looking straight up.

    Args:
        sky: The scene's sky color.
        ray: The escaping ray.

    Returns:
        The gradient color for the ray direction.
    """
    t = 0.5 * (ray.direction.z + 1.0)
    return sky.linear_blend(WHITE, t)


def cast_ray(
    scene: Scene,
    ray: Ray,
    window: Range,
    depth: int,
    rng: np.random.Generator,
) -> Color:
    """Trace a ray through the scene and return the light it gathers.

    Args:
        scene: The scene to trace.
        ray: The ray to follow.
        window: Accepted hit distances for this segment of the path.
        depth: Remaining number of bounces.
        rng: Random generator for material scattering.

    Returns:
        The linear color carried back along the ray.
    """
    if depth <= 0:
        return BLACK

    hit = scene.find_nearest(ray, window)
    if hit is None:
        return sky_color(scene.sky, ray)

    bounce = scatter(hit.material, ray, hit.point, hit.normal, scene.refraction_index, rng)
    if bounce is None:
        return BLACK

    remaining = Range(window.lower, window.upper - hit.distance)
    return hit.material.color.mix(cast_ray(scene, bounce, remaining, depth - 1, rng))


def preview_color(scene: Scene, ray: Ray, window: Range) -> Color:
    """Flat-shaded color of the first surface along a ray.

    Surfaces facing up are drawn in their full color, fading to black as
    the normal turns downward. No randomness is involved.
    """
    hit = scene.find_nearest(ray, window)
    if hit is None:
        return sky_color(scene.sky, ray)
    return BLACK.linear_blend(hit.material.color, 0.5 * (hit.normal.z + 1.0))


__all__ = ["cast_ray", "preview_color", "sky_color"]
