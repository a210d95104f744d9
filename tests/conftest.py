"""Pytest configuration for obscura tests.

Provides a seeded random generator and a few common materials and scenes.
"""

import numpy as np
import pytest

from obscura.core.color import Color
from obscura.core.vector import Vector
from obscura.geometry.plane import Plane
from obscura.geometry.sphere import Sphere
from obscura.materials.dielectric import Dielectric
from obscura.materials.lambertian import Lambertian
from obscura.materials.metallic import Metallic
from obscura.scene.manager import Scene


@pytest.fixture
def rng():
    """A freshly seeded generator, so every test sees the same stream."""
    return np.random.default_rng(42)


@pytest.fixture
def grey():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def mirror():
    return Metallic(Color(0.9, 0.9, 0.9))


@pytest.fixture
def glass():
    return Dielectric(Color(1.0, 1.0, 1.0), 1.5)


@pytest.fixture
def empty_scene():
    return Scene()


@pytest.fixture
def ground_and_ball(grey):
    """An upward-facing ground plane and a sphere standing on it."""
    scene = Scene()
    scene.add(Plane(grey, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0)))
    scene.add(Sphere(grey, Vector(6.0, 0.0, 1.0), 1.0))
    return scene
