"""Core types: vectors, rays, colors and the path tracing integrator."""

from obscura.core.color import BLACK, DEFAULT_SKY, WHITE, Color
from obscura.core.ray import Range, Ray
from obscura.core.vector import Vector

__all__ = ["BLACK", "Color", "DEFAULT_SKY", "Range", "Ray", "Vector", "WHITE"]
