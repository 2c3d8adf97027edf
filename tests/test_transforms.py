"""Unit tests for 4x4 transform constructors.

Tests cover:
- Translation, scaling, rotation and shearing of points and vectors
- Composition order
- Inversion and singular matrices
- The view transform
"""

import math

import numpy as np
import pytest

from raytracer.core.transforms import (
    as_matrix,
    identity,
    invert,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from raytracer.core.tuples import point, vector

HALF_SQRT2 = math.sqrt(2.0) / 2.0


class TestTranslation:
    """Tests for translation matrices."""

    def test_translates_point(self):
        """Test that a translation moves a point."""
        assert np.allclose(translation(5.0, -3.0, 2.0) @ point(-3.0, 4.0, 5.0), point(2.0, 1.0, 7.0))

    def test_inverse_translates_backwards(self):
        """Test that the inverse translation moves a point the other way."""
        inverse = invert(translation(5.0, -3.0, 2.0))
        assert np.allclose(inverse @ point(-3.0, 4.0, 5.0), point(-8.0, 7.0, 3.0))

    def test_does_not_affect_vectors(self):
        """Test that vectors are unchanged by translation."""
        v = vector(-3.0, 4.0, 5.0)
        assert np.allclose(translation(5.0, -3.0, 2.0) @ v, v)


class TestScaling:
    """Tests for scaling matrices."""

    def test_scales_point_and_vector(self):
        """Test that scaling applies to both points and vectors."""
        transform = scaling(2.0, 3.0, 4.0)
        assert np.allclose(transform @ point(-4.0, 6.0, 8.0), point(-8.0, 18.0, 32.0))
        assert np.allclose(transform @ vector(-4.0, 6.0, 8.0), vector(-8.0, 18.0, 32.0))

    def test_reflection_is_negative_scaling(self):
        """Test that scaling by -1 mirrors a point across an axis."""
        assert np.allclose(scaling(-1.0, 1.0, 1.0) @ point(2.0, 3.0, 4.0), point(-2.0, 3.0, 4.0))


class TestRotation:
    """Tests for rotations about each axis."""

    def test_rotation_x(self):
        """Test rotating a point around the x axis."""
        p = point(0.0, 1.0, 0.0)
        assert np.allclose(rotation_x(math.pi / 4) @ p, point(0.0, HALF_SQRT2, HALF_SQRT2))
        assert np.allclose(rotation_x(math.pi / 2) @ p, point(0.0, 0.0, 1.0))

    def test_inverse_rotation_x(self):
        """Test that the inverse x rotation turns the other way."""
        inverse = invert(rotation_x(math.pi / 4))
        assert np.allclose(inverse @ point(0.0, 1.0, 0.0), point(0.0, HALF_SQRT2, -HALF_SQRT2))

    def test_rotation_y(self):
        """Test rotating a point around the y axis."""
        p = point(0.0, 0.0, 1.0)
        assert np.allclose(rotation_y(math.pi / 4) @ p, point(HALF_SQRT2, 0.0, HALF_SQRT2))
        assert np.allclose(rotation_y(math.pi / 2) @ p, point(1.0, 0.0, 0.0))

    def test_rotation_z(self):
        """Test rotating a point around the z axis."""
        p = point(0.0, 1.0, 0.0)
        assert np.allclose(rotation_z(math.pi / 4) @ p, point(-HALF_SQRT2, HALF_SQRT2, 0.0))
        assert np.allclose(rotation_z(math.pi / 2) @ p, point(-1.0, 0.0, 0.0))


class TestShearing:
    """Tests for shearing matrices."""

    @pytest.mark.parametrize(
        "params, expected",
        [
            ((1, 0, 0, 0, 0, 0), (5.0, 3.0, 4.0)),
            ((0, 1, 0, 0, 0, 0), (6.0, 3.0, 4.0)),
            ((0, 0, 1, 0, 0, 0), (2.0, 5.0, 4.0)),
            ((0, 0, 0, 1, 0, 0), (2.0, 7.0, 4.0)),
            ((0, 0, 0, 0, 1, 0), (2.0, 3.0, 6.0)),
            ((0, 0, 0, 0, 0, 1), (2.0, 3.0, 7.0)),
        ],
    )
    def test_shearing_moves_each_axis(self, params, expected):
        """Test each shearing coefficient in isolation."""
        assert np.allclose(shearing(*params) @ point(2.0, 3.0, 4.0), point(*expected))


class TestComposition:
    """Tests for chaining transforms."""

    def test_chained_transforms_apply_right_to_left(self):
        """Test that rotate, then scale, then translate composes as T @ S @ R."""
        p = point(1.0, 0.0, 1.0)
        transform = translation(10.0, 5.0, 7.0) @ scaling(5.0, 5.0, 5.0) @ rotation_x(math.pi / 2)
        assert np.allclose(transform @ p, point(15.0, 0.0, 7.0))

    def test_product_times_inverse_is_identity(self):
        """Test that multiplying by an inverse restores the original matrix."""
        a = translation(1.0, 2.0, 3.0) @ rotation_y(0.7) @ scaling(2.0, 0.5, 3.0)
        b = shearing(0.1, 0.0, 0.2, 0.0, 0.0, 0.3) @ rotation_z(1.2)
        assert np.allclose((a @ b) @ invert(b), a)


class TestInversion:
    """Tests for matrix inversion and validation."""

    def test_singular_matrix_raises(self):
        """Test that a non-invertible matrix is rejected."""
        with pytest.raises(ValueError, match="not invertible"):
            invert(scaling(1.0, 0.0, 1.0))

    def test_as_matrix_accepts_nested_lists(self):
        """Test that nested sequences are coerced to float64 4x4 matrices."""
        matrix = as_matrix([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]])
        assert matrix.dtype == np.float64
        assert np.array_equal(matrix, identity())

    def test_as_matrix_rejects_wrong_shape(self):
        """Test that a 3x3 matrix is rejected."""
        with pytest.raises(ValueError, match="4x4"):
            as_matrix(np.identity(3))


class TestViewTransform:
    """Tests for the world-to-camera view transform."""

    def test_default_orientation_is_identity(self):
        """Test looking from the origin toward -z."""
        t = view_transform(point(0.0, 0.0, 0.0), point(0.0, 0.0, -1.0), vector(0.0, 1.0, 0.0))
        assert np.allclose(t, identity())

    def test_looking_toward_positive_z_mirrors(self):
        """Test that looking toward +z flips x and z."""
        t = view_transform(point(0.0, 0.0, 0.0), point(0.0, 0.0, 1.0), vector(0.0, 1.0, 0.0))
        assert np.allclose(t, scaling(-1.0, 1.0, -1.0))

    def test_moves_the_world(self):
        """Test that the view transform moves the world, not the eye."""
        t = view_transform(point(0.0, 0.0, 8.0), point(0.0, 0.0, 0.0), vector(0.0, 1.0, 0.0))
        assert np.allclose(t, translation(0.0, 0.0, -8.0))

    def test_arbitrary_view(self):
        """Test an arbitrary eye, target and non-perpendicular up vector."""
        t = view_transform(point(1.0, 3.0, 2.0), point(4.0, -2.0, 8.0), vector(1.0, 1.0, 0.0))
        expected = np.array(
            [
                [-0.50709, 0.50709, 0.67612, -2.36643],
                [0.76772, 0.60609, 0.12122, -2.82843],
                [-0.35857, 0.59761, -0.71714, 0.00000],
                [0.00000, 0.00000, 0.00000, 1.00000],
            ]
        )
        assert np.allclose(t, expected, atol=1e-4)
