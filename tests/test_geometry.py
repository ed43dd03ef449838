"""
Unit tests for p5_printer.geometry.

Tests:
- Vector2 / Vector2i / Vector3 arithmetic
- Matrix3x3 construction, access and algebra
"""

import math

import numpy as np
import pytest

from p5_printer.geometry import Matrix3x3, Vector2, Vector2i, Vector3


class TestVector2:
    """Tests for Vector2."""

    def test_components_are_floats(self):
        """Integer inputs are stored as floats."""
        v = Vector2(5, 10)
        assert isinstance(v.x, float)
        assert v == Vector2(5.0, 10.0)

    def test_arithmetic(self):
        """Named arithmetic methods return new vectors."""
        a = Vector2(1, 2)
        b = Vector2(3, -4)
        assert a.add(b) == Vector2(4, -2)
        assert a.subtract(b) == Vector2(-2, 6)
        assert a.multiply(b) == Vector2(3, -8)
        assert a.scale(2) == Vector2(2, 4)
        assert b.divide(2) == Vector2(1.5, -2)
        assert a.negate() == Vector2(-1, -2)

    def test_dot_and_cross(self):
        """Dot product and scalar cross product."""
        assert Vector2(1, 2).dot(Vector2(3, 4)) == 11.0
        assert Vector2(1, 0).cross(Vector2(0, 1)) == 1.0

    def test_normalized(self):
        """Normalized vectors have unit length; zero stays zero."""
        assert Vector2(3, 4).length() == 5.0
        assert math.isclose(Vector2(3, 4).normalized().length(), 1.0)
        assert Vector2.zero().normalized() == Vector2.zero()

    def test_frozen(self):
        """Vectors are immutable."""
        v = Vector2(1, 2)
        with pytest.raises(AttributeError):
            v.x = 3.0


class TestVector2i:
    """Tests for Vector2i."""

    def test_components_are_ints(self):
        """Components are kept as integers."""
        size = Vector2i(800, 600)
        assert isinstance(size.x, int)
        assert size.scale(2) == Vector2i(1600, 1200)
        assert size.dot(Vector2i(1, 1)) == 1400


class TestVector3:
    """Tests for Vector3."""

    def test_cross_product(self):
        """X cross Y is Z."""
        assert Vector3.unit_x().cross(Vector3.unit_y()) == Vector3.unit_z()

    def test_array_conversion(self):
        """to_array/from_array round the components through numpy."""
        v = Vector3(1, -2, 3.5)
        arr = v.to_array()
        assert arr.dtype == np.float64
        assert np.allclose(arr, [1.0, -2.0, 3.5])
        assert Vector3.from_array(arr) == v

    def test_length(self):
        """Euclidean length."""
        assert Vector3(2, 3, 6).length() == 7.0


class TestMatrixConstruction:
    """Tests for Matrix3x3 constructors."""

    def test_identity(self):
        """Identity has ones on the diagonal."""
        assert Matrix3x3.identity() == Matrix3x3.diagonal(1.0)

    def test_diagonal_defaults(self):
        """b and c default to a."""
        m = Matrix3x3.diagonal(2.0, 3.0)
        assert m.rows() == ((2.0, 0.0, 0.0), (0.0, 3.0, 0.0), (0.0, 0.0, 2.0))

    def test_wrong_shape_rejected(self):
        """Only 3x3 input is accepted."""
        with pytest.raises(ValueError):
            Matrix3x3(np.zeros((2, 3)))

    def test_storage_is_read_only(self):
        """The backing array cannot be written."""
        m = Matrix3x3.identity()
        with pytest.raises(ValueError):
            m.m[0, 0] = 5.0

    def test_from_row_vectors(self):
        """Rows come from the given vectors."""
        m = Matrix3x3.from_row_vectors(Vector3(1, 2, 3), Vector3(4, 5, 6), Vector3(7, 8, 9))
        assert m.row(1) == Vector3(4, 5, 6)
        assert m.column(2) == Vector3(3, 6, 9)

    def test_2d_rotation_layout(self):
        """Rotation rows are (c, s, 0), (-s, c, 0), (0, 0, 1)."""
        m = Matrix3x3.make_2d_rotation(math.pi / 2)
        assert np.allclose(m.m, [[0, 1, 0], [-1, 0, 0], [0, 0, 1]])

    def test_2d_translation(self):
        """Translation sits in the last column."""
        m = Matrix3x3.make_2d_translation_vector(Vector2(3, -4))
        assert m.transform(Vector3(1, 1, 1)) == Vector3(4, -3, 1)

    def test_skew_symmetric_matches_cross(self):
        """K(a) applied to b equals a cross b."""
        a = Vector3(1, 2, 3)
        b = Vector3(-4, 0.5, 2)
        k = Matrix3x3.make_3d_skew_symmetric_cross_product(a)
        assert np.allclose(k.transform(b).to_array(), a.cross(b).to_array())


class TestMatrixAccess:
    """Tests for coefficient lookup."""

    def test_getitem_returns_float(self):
        """m[row, column] is a plain float."""
        m = Matrix3x3.make_2d_scale(2, 3)
        assert m[1, 1] == 3.0
        assert type(m[1, 1]) is float

    @pytest.mark.parametrize("index", [(3, 0), (0, 3), (-1, 0)])
    def test_out_of_range(self, index):
        """Indices outside 0..2 raise IndexError."""
        with pytest.raises(IndexError):
            Matrix3x3.identity()[index]

    def test_unhashable(self):
        """Matrices compare by value and are not hashable."""
        with pytest.raises(TypeError):
            hash(Matrix3x3.identity())


class TestMatrixAlgebra:
    """Tests for Matrix3x3 algebra."""

    def test_determinant_and_trace(self):
        """Determinant and trace of a diagonal matrix."""
        m = Matrix3x3.diagonal(2.0, 3.0, 4.0)
        assert math.isclose(m.determinant(), 24.0)
        assert m.trace == 9.0

    def test_inverse(self):
        """M times its inverse is the identity."""
        m = Matrix3x3.from_rows((2, 0, 1), (1, 3, 0), (0, 1, 4))
        inv = m.inverted()
        assert inv is not None
        assert np.allclose(m.multiply(inv).m, np.eye(3))

    def test_singular_has_no_inverse(self):
        """A zero determinant gives None."""
        assert Matrix3x3.diagonal(1.0, 0.0, 1.0).inverted() is None

    def test_elementwise_operations(self):
        """add/subtract/negate/scale/divide act on every coefficient."""
        a = Matrix3x3.repeating(2.0)
        b = Matrix3x3.identity()
        assert np.allclose(a.add(b).m, np.full((3, 3), 2.0) + np.eye(3))
        assert np.allclose(a.subtract(b).m, np.full((3, 3), 2.0) - np.eye(3))
        assert a.negate() == Matrix3x3.repeating(-2.0)
        assert a.scale(3) == Matrix3x3.repeating(6.0)
        assert a.divide(4) == Matrix3x3.repeating(0.5)

    def test_transposed(self):
        """Transposition swaps rows and columns."""
        m = Matrix3x3.make_2d_translation(5, 6)
        assert m.transposed()[2, 0] == 5.0
        assert m.transposed().transposed() == m
