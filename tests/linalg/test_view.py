"""
Tests for the matrix/vector view helpers.

Validates:
    - to_matrix / from_matrix round trip and their error cases
    - get_rows for 1-d and 2-d input, get_columns
    - is_convergent (strict row diagonal dominance)
    - split_batches / stack_batches order and independence
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import DimensionError, NotSquareError, ShapeError
from pylinalg.linalg._view import (
    from_matrix,
    get_columns,
    get_rows,
    is_convergent,
    split_batches,
    stack_batches,
    to_matrix,
)


# ═══════════════════════════════════════════════════════════════════════
# to_matrix / from_matrix
# ═══════════════════════════════════════════════════════════════════════


class TestToFromMatrix:

    def test_rows_in_order(self):
        a = np.arange(6.0).reshape(2, 3)
        rows = to_matrix(a)
        assert len(rows) == 2
        np.testing.assert_array_equal(rows[1], [3.0, 4.0, 5.0])

    def test_rows_are_copies(self):
        a = np.zeros((2, 2))
        rows = to_matrix(a)
        rows[0][0] = 7.0
        assert a[0, 0] == 0.0

    def test_round_trip(self):
        a = np.arange(12).reshape(3, 4)
        np.testing.assert_array_equal(from_matrix(to_matrix(a)), a)

    def test_requires_2d(self):
        with pytest.raises(DimensionError):
            to_matrix(np.zeros(3))
        with pytest.raises(DimensionError):
            to_matrix(np.zeros((2, 2, 2)))

    def test_from_matrix_count_mismatch(self):
        with pytest.raises(ShapeError):
            from_matrix([np.array([1.0, 2.0]), np.array([3.0])])


# ═══════════════════════════════════════════════════════════════════════
# get_rows / get_columns
# ═══════════════════════════════════════════════════════════════════════


class TestRowsColumns:

    def test_rows_of_matrix(self):
        a = np.array([[1, 2], [3, 4]])
        rows = get_rows(a)
        np.testing.assert_array_equal(rows[0], [1, 2])

    def test_rows_of_vector_are_single_elements(self):
        rows = get_rows(np.array([5.0, 6.0, 7.0]))
        assert len(rows) == 3
        assert all(r.shape == (1,) for r in rows)
        assert rows[2][0] == 7.0

    def test_columns(self):
        a = np.array([[1, 2], [3, 4]])
        cols = get_columns(a)
        np.testing.assert_array_equal(cols[1], [2, 4])

    def test_columns_require_2d(self):
        with pytest.raises(DimensionError):
            get_columns(np.zeros(3))


# ═══════════════════════════════════════════════════════════════════════
# is_convergent
# ═══════════════════════════════════════════════════════════════════════


class TestIsConvergent:

    def test_dominant(self):
        assert is_convergent(np.array([[4.0, 1.0], [-1.0, 3.0]]))

    def test_equality_is_not_dominant(self):
        assert not is_convergent(np.array([[2.0, 2.0], [0.0, 1.0]]))

    def test_not_dominant(self):
        assert not is_convergent(np.array([[1.0, 2.0], [3.0, 4.0]]))

    def test_integer_input(self):
        assert is_convergent(np.array([[3, 1], [1, 3]], dtype=np.int8))

    def test_requires_square(self):
        with pytest.raises(NotSquareError):
            is_convergent(np.zeros((2, 3)))


# ═══════════════════════════════════════════════════════════════════════
# Batches
# ═══════════════════════════════════════════════════════════════════════


class TestBatches:

    def test_split_order(self):
        a = np.arange(24.0).reshape(2, 3, 2, 2)
        slices = split_batches(a)
        assert len(slices) == 6
        np.testing.assert_array_equal(slices[4], a[1, 1])

    def test_single_matrix_is_one_slice(self):
        slices = split_batches(np.eye(3))
        assert len(slices) == 1
        np.testing.assert_array_equal(slices[0], np.eye(3))

    def test_slices_are_independent(self):
        a = np.zeros((2, 2, 2))
        slices = split_batches(a)
        slices[0][0, 0] = 1.0
        assert a[0, 0, 0] == 0.0

    def test_stack_inverts_split(self):
        a = np.arange(24.0).reshape(2, 3, 2, 2)
        np.testing.assert_array_equal(stack_batches(split_batches(a), (2, 3)), a)
