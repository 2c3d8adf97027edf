"""Unit tests for the infinite plane.

Tests cover:
- Constant normal
- Parallel and coplanar rays
- Rays from above and below
- Transformed planes
"""

import math

import numpy as np
import pytest

from raytracer.core.ray import Ray
from raytracer.core.transforms import rotation_x, translation
from raytracer.core.tuples import point, vector
from raytracer.geometry.plane import Plane


class TestPlaneNormal:
    """Tests for plane normals."""

    @pytest.mark.parametrize("p", [(0.0, 0.0, 0.0), (10.0, 0.0, -10.0), (-5.0, 0.0, 150.0)])
    def test_normal_is_constant(self, id_allocator, p):
        """Test that the normal is +y everywhere."""
        plane = Plane(id_allocator=id_allocator)
        assert np.allclose(plane.local_normal_at(point(*p)), vector(0.0, 1.0, 0.0))

    def test_normal_is_not_shared(self, id_allocator):
        """Test that mutating a returned normal does not affect later calls."""
        plane = Plane(id_allocator=id_allocator)
        n = plane.local_normal_at(point(0.0, 0.0, 0.0))
        n[1] = 5.0
        assert plane.local_normal_at(point(0.0, 0.0, 0.0))[1] == 1.0

    def test_rotated_plane_normal(self, id_allocator):
        """Test the world normal of a plane stood up as a wall."""
        plane = Plane(transform=rotation_x(math.pi / 2), id_allocator=id_allocator)
        assert np.allclose(plane.normal_at(point(0.0, 0.0, 0.0)), vector(0.0, 0.0, 1.0))


class TestPlaneIntersection:
    """Tests for ray-plane intersection."""

    def test_parallel_ray(self, id_allocator):
        """Test a ray parallel to the plane."""
        plane = Plane(id_allocator=id_allocator)
        assert plane.local_intersections(Ray(point(0.0, 10.0, 0.0), vector(0.0, 0.0, 1.0))) == []

    def test_coplanar_ray(self, id_allocator):
        """Test a ray lying in the plane."""
        plane = Plane(id_allocator=id_allocator)
        assert plane.local_intersections(Ray(point(0.0, 0.0, 0.0), vector(0.0, 0.0, 1.0))) == []

    def test_ray_from_above(self, id_allocator):
        """Test a ray coming down onto the plane."""
        plane = Plane(id_allocator=id_allocator)
        xs = plane.local_intersections(Ray(point(0.0, 1.0, 0.0), vector(0.0, -1.0, 0.0)))
        assert len(xs) == 1
        assert xs[0].t == pytest.approx(1.0)
        assert xs[0].shape is plane

    def test_ray_from_below(self, id_allocator):
        """Test a ray coming up onto the plane."""
        plane = Plane(id_allocator=id_allocator)
        xs = plane.local_intersections(Ray(point(0.0, -1.0, 0.0), vector(0.0, 1.0, 0.0)))
        assert len(xs) == 1
        assert xs[0].t == pytest.approx(1.0)

    def test_translated_plane(self, id_allocator):
        """Test that the plane's transform is applied by intersections()."""
        plane = Plane(transform=translation(0.0, -1.0, 0.0), id_allocator=id_allocator)
        xs = plane.intersections(Ray(point(0.0, 1.0, 0.0), vector(0.0, -1.0, 0.0)))
        assert [i.t for i in xs] == pytest.approx([2.0])
