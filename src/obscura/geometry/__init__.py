"""Geometric primitives and ray intersection."""

from obscura.geometry.plane import Plane
from obscura.geometry.quadric import Quadric, QuadricEquation
from obscura.geometry.sphere import Sphere
from obscura.geometry.surface import Intersection, Surface, intersect_surface

__all__ = [
    "Intersection",
    "Plane",
    "Quadric",
    "QuadricEquation",
    "Sphere",
    "Surface",
    "intersect_surface",
]
