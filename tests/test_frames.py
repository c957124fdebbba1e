"""
Tests for coordinate frame transformations.

These verify the quaternion math, transform composition and axis helpers.
"""

import numpy as np
import pytest
from aerosurfaces.frames import Quaternion, Transform, normalize_or_zero


class TestQuaternion:
    """Tests for Quaternion class."""

    def test_identity_quaternion(self):
        """Identity quaternion should not rotate."""
        q = Quaternion.identity()
        v = np.array([1.0, 2.0, 3.0])
        np.testing.assert_array_almost_equal(q.rotate_vector(v), v)

    def test_quaternion_normalization(self):
        """Quaternion should auto-normalize."""
        q = Quaternion(2, 0, 0, 0)
        assert abs(q.w - 1.0) < 1e-10

        q = Quaternion(1, 1, 1, 1)
        norm = np.sqrt(q.w**2 + q.x**2 + q.y**2 + q.z**2)
        assert abs(norm - 1.0) < 1e-10

    def test_90_degree_rotations(self):
        """Right-handed quarter turns about each axis."""
        q = Quaternion.from_rotation_z(np.pi / 2)
        np.testing.assert_array_almost_equal(q.rotate_vector([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])

        q = Quaternion.from_rotation_y(np.pi / 2)
        np.testing.assert_array_almost_equal(q.rotate_vector([0.0, 0.0, 1.0]), [1.0, 0.0, 0.0])

        q = Quaternion.from_rotation_x(np.pi / 2)
        np.testing.assert_array_almost_equal(q.rotate_vector([0.0, 1.0, 0.0]), [0.0, 0.0, 1.0])

    def test_zero_axis_is_identity(self):
        q = Quaternion.from_axis_angle([0.0, 0.0, 0.0], 1.0)
        np.testing.assert_array_almost_equal(q.to_array(), [1.0, 0.0, 0.0, 0.0])

    def test_dcm_and_quaternion_equivalent(self):
        """DCM rotation should match quaternion rotation."""
        q = Quaternion.from_axis_angle([0.3, -0.2, 0.9], 0.7)
        v = np.array([1.0, 2.0, 3.0])
        np.testing.assert_array_almost_equal(q.rotate_vector(v), q.to_dcm() @ v)

    def test_inverse_rotation(self):
        """Inverse rotation should return to original."""
        q = Quaternion.from_axis_angle([1.0, 1.0, 0.0], 0.4)
        v = np.array([1.0, 2.0, 3.0])
        np.testing.assert_array_almost_equal(q.inverse_rotate_vector(q.rotate_vector(v)), v)
        np.testing.assert_array_almost_equal(
            q.conjugate().rotate_vector(v), q.inverse_rotate_vector(v))

    def test_product_applies_right_operand_first(self):
        a = Quaternion.from_rotation_z(np.pi / 2)
        b = Quaternion.from_rotation_x(np.pi / 2)
        v = np.array([0.0, 1.0, 0.0])
        np.testing.assert_array_almost_equal(
            (a * b).rotate_vector(v), a.rotate_vector(b.rotate_vector(v)))


class TestTransform:
    """Tests for rigid transforms and axis helpers."""

    def test_default_axes(self):
        """Y up, -Z forward, +X right."""
        t = Transform()
        np.testing.assert_array_almost_equal(t.forward, [0.0, 0.0, -1.0])
        np.testing.assert_array_almost_equal(t.back, [0.0, 0.0, 1.0])
        np.testing.assert_array_almost_equal(t.right, [1.0, 0.0, 0.0])
        np.testing.assert_array_almost_equal(t.left, [-1.0, 0.0, 0.0])
        np.testing.assert_array_almost_equal(t.up, [0.0, 1.0, 0.0])
        np.testing.assert_array_almost_equal(t.down, [0.0, -1.0, 0.0])

    def test_compose(self):
        """Child translation is rotated by the parent before offsetting."""
        parent = Transform.from_xyz(1.0, 2.0, 3.0).with_rotation(Quaternion.from_rotation_z(np.pi / 2))
        child = Transform.from_xyz(1.0, 0.0, 0.0)

        composed = parent.mul_transform(child)
        np.testing.assert_array_almost_equal(composed.translation, [1.0, 3.0, 3.0])
        np.testing.assert_array_almost_equal(composed.right, [0.0, 1.0, 0.0])

    def test_compose_rotations(self):
        parent = Transform(rotation=Quaternion.from_rotation_y(0.3))
        child = Transform(rotation=Quaternion.from_rotation_y(0.4))
        expected = Quaternion.from_rotation_y(0.7)
        np.testing.assert_array_almost_equal(
            parent.mul_transform(child).rotation.to_dcm(), expected.to_dcm())

    def test_transform_point(self):
        t = Transform.from_xyz(0.0, 10.0, 0.0).with_rotation(Quaternion.from_rotation_y(np.pi))
        np.testing.assert_array_almost_equal(t.transform_point([1.0, 0.0, 0.0]), [-1.0, 10.0, 0.0])


class TestNormalizeOrZero:
    """Direction normalization never yields NaN."""

    def test_unit_vector(self):
        np.testing.assert_array_almost_equal(normalize_or_zero([3.0, 0.0, 4.0]), [0.6, 0.0, 0.8])

    def test_zero_vector(self):
        np.testing.assert_array_equal(normalize_or_zero([0.0, 0.0, 0.0]), np.zeros(3))

    def test_non_finite(self):
        np.testing.assert_array_equal(normalize_or_zero([np.nan, 1.0, 0.0]), np.zeros(3))
        np.testing.assert_array_equal(normalize_or_zero([np.inf, 0.0, 0.0]), np.zeros(3))
