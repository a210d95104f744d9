"""Unit tests for material construction and scatter dispatch."""

import pytest

from obscura.core.color import Color
from obscura.core.ray import Ray
from obscura.core.vector import Vector


class TestMaterialValidation:
    """Tests for parameter checks at construction."""

    @pytest.mark.parametrize("kind", ["lambertian", "metallic", "dielectric"])
    def test_negative_color_raises(self, kind):
        """Test negative color channels are rejected by every material."""
        from obscura.materials import Dielectric, Lambertian, Metallic

        constructor = {"lambertian": Lambertian, "metallic": Metallic, "dielectric": Dielectric}[kind]
        with pytest.raises(ValueError, match="negative"):
            constructor(Color(0.5, -0.1, 0.5))

    def test_one_sided_flags(self, grey, mirror, glass):
        """Test only dielectrics are two-sided."""
        assert grey.one_sided
        assert mirror.one_sided
        assert not glass.one_sided

    def test_materials_are_hashable_values(self):
        """Test equal parameters give equal materials."""
        from obscura.materials import Lambertian

        assert Lambertian(Color(0.1, 0.2, 0.3)) == Lambertian(Color(0.1, 0.2, 0.3))
        assert len({Lambertian(Color(0.1, 0.2, 0.3)), Lambertian(Color(0.1, 0.2, 0.3))}) == 1


class TestScatterDispatch:
    """Tests for the scatter entry point."""

    def test_dispatches_by_type(self, grey, mirror, glass, rng):
        """Test every material kind produces a ray for a head-on hit."""
        from obscura.materials import scatter

        incoming = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))
        point = Vector(0.0, 0.0, 0.0)
        normal = Vector(0.0, 0.0, 1.0)
        for material in (grey, glass):
            assert scatter(material, incoming, point, normal, 1.0, rng) is not None
        bounce = scatter(mirror, incoming, point, normal, 1.0, rng)
        assert bounce.direction == Vector(0.0, 0.0, 1.0)

    def test_unknown_material_raises(self, rng):
        """Test objects outside the material union are rejected."""
        from obscura.materials import scatter

        incoming = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))
        with pytest.raises(TypeError, match="Unsupported material"):
            scatter(object(), incoming, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0), 1.0, rng)
