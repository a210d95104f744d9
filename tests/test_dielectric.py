"""Unit tests for dielectric scattering.

Tests cover:
- Color transform at construction
- Schlick reflectance
- Refraction when entering and exiting
- Total internal reflection
- Reflection probability at normal incidence
"""

import math

import pytest

from obscura.core.color import Color
from obscura.core.ray import Ray
from obscura.core.vector import Vector, normalize

UP = Vector(0.0, 0.0, 1.0)
ORIGIN = Vector(0.0, 0.0, 0.0)


class FixedDraw:
    """Stand-in generator whose random() always returns the same value."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


class TestDielectricMaterial:
    """Tests for the Dielectric dataclass."""

    def test_color_is_square_rooted(self):
        """Test the stored color is the square root of the given one."""
        from obscura.materials.dielectric import Dielectric

        glass = Dielectric(Color(0.25, 1.0, 0.0), 1.5)
        assert glass.color == Color(0.5, 1.0, 0.0)

    @pytest.mark.parametrize("index", [0.0, -1.5])
    def test_non_positive_index_raises(self, index):
        """Test refraction indices must be positive."""
        from obscura.materials.dielectric import Dielectric

        with pytest.raises(ValueError, match="index"):
            Dielectric(Color(1.0, 1.0, 1.0), index)


class TestSchlick:
    """Tests for schlick_reflectance."""

    def test_normal_incidence(self):
        """Test reflectance at normal incidence equals r0."""
        from obscura.materials.dielectric import schlick_reflectance

        assert schlick_reflectance(1.0, 1.0, 1.5) == pytest.approx(0.04)

    def test_grazing_incidence(self):
        """Test reflectance approaches 1 at grazing angles."""
        from obscura.materials.dielectric import schlick_reflectance

        assert schlick_reflectance(0.0, 1.0, 1.5) == pytest.approx(1.0)

    def test_matched_indices(self):
        """Test nothing is reflected at normal incidence between equal media."""
        from obscura.materials.dielectric import schlick_reflectance

        assert schlick_reflectance(1.0, 1.5, 1.5) == 0.0


class TestDielectricScatter:
    """Tests for scatter_dielectric."""

    def test_entering_bends_toward_normal(self):
        """Test Snell's law when entering glass from air."""
        from obscura.materials.dielectric import scatter_dielectric

        incoming = Ray(Vector(-1.0, 0.0, 1.0), Vector(1.0, 0.0, -1.0))
        bounce = scatter_dielectric(1.5, incoming, ORIGIN, UP, 1.0, FixedDraw(0.99))

        assert bounce.direction.z < 0.0
        assert bounce.direction.x == pytest.approx(math.sin(math.pi / 4) / 1.5)

    def test_exiting_bends_away_from_normal(self):
        """Test Snell's law when leaving glass into air."""
        from obscura.materials.dielectric import scatter_dielectric

        sin_i = 0.5
        incoming = Ray(ORIGIN, Vector(sin_i, 0.0, math.sqrt(1.0 - sin_i * sin_i)))
        bounce = scatter_dielectric(1.5, incoming, ORIGIN, UP, 1.0, FixedDraw(0.99))

        assert bounce.direction.z > 0.0
        assert bounce.direction.x == pytest.approx(sin_i * 1.5)

    def test_low_draw_reflects(self):
        """Test a draw below the reflectance picks reflection."""
        from obscura.materials.dielectric import scatter_dielectric

        incoming = Ray(Vector(0.0, 0.0, 1.0), Vector(0.0, 0.0, -1.0))
        bounce = scatter_dielectric(1.5, incoming, ORIGIN, UP, 1.0, FixedDraw(0.01))
        assert bounce.direction == UP

    def test_total_internal_reflection(self):
        """Test a steep ray inside glass is reflected back inside."""
        from obscura.materials.dielectric import scatter_dielectric

        d = normalize(Vector(1.0, 0.0, 0.2))
        incoming = Ray(ORIGIN, d)
        draw = FixedDraw(0.99)
        bounce = scatter_dielectric(1.5, incoming, ORIGIN, UP, 1.0, draw)

        assert bounce is not None
        assert bounce.direction.x == pytest.approx(d.x)
        assert bounce.direction.z == pytest.approx(-d.z)
        assert draw.calls == 1

    def test_reflection_probability(self, rng):
        """Test about 4 percent of head-on rays reflect off glass."""
        from obscura.materials.dielectric import scatter_dielectric

        incoming = Ray(Vector(0.0, 0.0, 1.0), Vector(0.0, 0.0, -1.0))
        reflected = sum(
            scatter_dielectric(1.5, incoming, ORIGIN, UP, 1.0, rng).direction.z > 0.0
            for _ in range(4000)
        )
        assert 0.02 < reflected / 4000 < 0.06

    def test_denser_ambient_medium(self):
        """Test entering a less dense sphere from water bends away from the normal."""
        from obscura.materials.dielectric import scatter_dielectric

        incoming = Ray(Vector(-1.0, 0.0, 1.0), Vector(1.0, 0.0, -1.0))
        bounce = scatter_dielectric(1.0, incoming, ORIGIN, UP, 1.33, FixedDraw(0.99))
        assert bounce.direction.x == pytest.approx(math.sin(math.pi / 4) * 1.33)
