"""Unit tests for plane intersection.

Tests cover:
- Normal normalization and cached offset
- Ray hitting the plane from the front
- Parallel rays and hits outside the window
- Back-face hits on one-sided materials
"""

import pytest

from obscura.core.ray import Range, Ray
from obscura.core.vector import Vector

WINDOW = Range(0.1, 1000.0)


class TestPlaneBasics:
    """Tests for Plane construction."""

    def test_normal_is_normalized(self, grey):
        """Test the stored normal has unit length."""
        from obscura.geometry.plane import Plane

        plane = Plane(grey, Vector(0.0, 0.0, 2.0), Vector(0.0, 0.0, 5.0))
        assert plane.normal == Vector(0.0, 0.0, 1.0)
        assert plane.offset == 2.0

    def test_zero_normal_raises(self, grey):
        """Test a zero normal is rejected."""
        from obscura.geometry.plane import Plane

        with pytest.raises(ValueError):
            Plane(grey, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 0.0))


class TestPlaneIntersection:
    """Tests for ray-plane intersection."""

    def test_direct_hit(self, grey):
        """Test a ray straight down onto a floor."""
        from obscura.geometry.plane import Plane, hit_plane

        plane = Plane(grey, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))
        ray = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))
        assert hit_plane(plane, ray, WINDOW) == pytest.approx(5.0)

    def test_oblique_hit(self, grey):
        """Test a slanted ray travels further to reach the plane."""
        from obscura.geometry.plane import Plane, hit_plane

        plane = Plane(grey, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))
        ray = Ray(Vector(0.0, 0.0, 5.0), Vector(1.0, 0.0, -1.0))
        assert hit_plane(plane, ray, WINDOW) == pytest.approx(5.0 * 2**0.5)

    def test_parallel_ray_misses(self, grey):
        """Test a ray parallel to the plane never hits."""
        from obscura.geometry.plane import Plane, hit_plane

        plane = Plane(grey, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))
        ray = Ray(Vector(0.0, 0.0, 5.0), Vector(1.0, 0.0, 0.0))
        assert hit_plane(plane, ray, WINDOW) is None

    def test_plane_behind_ray_misses(self, grey):
        """Test a plane behind the origin is outside the window."""
        from obscura.geometry.plane import Plane, hit_plane

        plane = Plane(grey, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))
        ray = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, 1.0))
        assert hit_plane(plane, ray, WINDOW) is None

    def test_hit_beyond_window(self, grey):
        """Test a hit farther than the window's upper bound is dropped."""
        from obscura.geometry.plane import Plane, hit_plane

        plane = Plane(grey, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))
        ray = Ray(Vector(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))
        assert hit_plane(plane, ray, Range(0.1, 4.0)) is None

    def test_intersection_record(self, grey):
        """Test intersect_surface fills in point, normal and material."""
        from obscura.geometry.plane import Plane
        from obscura.geometry.surface import intersect_surface

        plane = Plane(grey, Vector(0.0, 0.0, 1.0), Vector(0.0, 0.0, 1.0))
        ray = Ray(Vector(2.0, 3.0, 5.0), Vector(0.0, 0.0, -1.0))
        hit = intersect_surface(plane, ray, WINDOW)

        assert hit is not None
        assert hit.distance == pytest.approx(4.0)
        assert hit.point == Vector(2.0, 3.0, 1.0)
        assert hit.normal == Vector(0.0, 0.0, 1.0)
        assert hit.material is grey

    def test_back_face_discarded_for_one_sided(self, grey):
        """Test a Lambertian plane is invisible from behind."""
        from obscura.geometry.plane import Plane
        from obscura.geometry.surface import intersect_surface

        plane = Plane(grey, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))
        ray = Ray(Vector(0.0, 0.0, -5.0), Vector(0.0, 0.0, 1.0))
        assert intersect_surface(plane, ray, WINDOW) is None

    def test_back_face_kept_for_dielectric(self, glass):
        """Test a dielectric plane is hit from either side."""
        from obscura.geometry.plane import Plane
        from obscura.geometry.surface import intersect_surface

        plane = Plane(glass, Vector(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))
        ray = Ray(Vector(0.0, 0.0, -5.0), Vector(0.0, 0.0, 1.0))
        hit = intersect_surface(plane, ray, WINDOW)
        assert hit is not None
        assert hit.distance == pytest.approx(5.0)
