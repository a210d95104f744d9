"""Unit tests for metallic scattering.

Tests cover:
- Perfect mirror reflection
- Grazing reflections are absorbed
- Fuzzy reflections stay above the surface or are absorbed
- Parameter validation
"""

import pytest

from obscura.core.color import Color
from obscura.core.ray import Ray
from obscura.core.vector import Vector, dot, normalize


class TestMetallicScatter:
    """Tests for scatter_metallic."""

    def test_mirror_reflection(self, rng):
        """Test a 45 degree ray reflects to 45 degrees."""
        from obscura.materials.metallic import scatter_metallic

        incoming = Ray(Vector(-1.0, 0.0, 1.0), Vector(1.0, 0.0, -1.0))
        bounce = scatter_metallic(0.0, incoming, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0), rng)

        expected = normalize(Vector(1.0, 0.0, 1.0))
        assert bounce is not None
        assert bounce.direction.x == pytest.approx(expected.x)
        assert bounce.direction.z == pytest.approx(expected.z)
        assert bounce.origin == Vector(0.0, 0.0, 0.0)

    def test_mirror_does_not_draw_random_numbers(self):
        """Test fuzz 0 leaves the generator untouched."""
        import numpy as np

        from obscura.materials.metallic import scatter_metallic

        rng = np.random.default_rng(5)
        incoming = Ray(Vector(0.0, 0.0, 1.0), Vector(0.0, 0.0, -1.0))
        scatter_metallic(0.0, incoming, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0), rng)
        assert rng.random() == np.random.default_rng(5).random()

    def test_grazing_is_absorbed(self, rng):
        """Test a reflection exactly along the surface is absorbed."""
        from obscura.materials.metallic import scatter_metallic

        incoming = Ray(Vector(-1.0, 0.0, 0.0), Vector(1.0, 0.0, 0.0))
        bounce = scatter_metallic(0.0, incoming, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0), rng)
        assert bounce is None

    def test_fuzzy_reflections_above_surface(self, rng):
        """Test every surviving fuzzy bounce points away from the surface."""
        from obscura.materials.metallic import scatter_metallic

        normal = Vector(0.0, 0.0, 1.0)
        incoming = Ray(Vector(-1.0, 0.0, 0.2), Vector(1.0, 0.0, -0.2))
        absorbed = 0
        for _ in range(500):
            bounce = scatter_metallic(0.8, incoming, Vector(0.0, 0.0, 0.0), normal, rng)
            if bounce is None:
                absorbed += 1
            else:
                assert dot(bounce.direction, normal) > 0.0
        # A large fuzz at a shallow angle pushes some bounces below the surface
        assert 0 < absorbed < 500


class TestMetallicMaterial:
    """Tests for the Metallic dataclass."""

    def test_default_fuzz(self):
        """Test metals are perfect mirrors by default."""
        from obscura.materials.metallic import Metallic

        assert Metallic(Color(0.5, 0.5, 0.5)).fuzz == 0.0

    def test_negative_fuzz_raises(self):
        """Test negative fuzz is rejected."""
        from obscura.materials.metallic import Metallic

        with pytest.raises(ValueError, match="Fuzz"):
            Metallic(Color(0.5, 0.5, 0.5), fuzz=-0.1)
